from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from testctx.contracts.outcome import UnitTestOutcome


@dataclass(frozen=True, slots=True)
class TestResult:
    """
    Outcome of one test execution, or of one row of a data-driven test.

    Keep this stable: reporters read these fields directly.
    """

    __test__ = False

    full_class_name: str
    test_name: str
    outcome: UnitTestOutcome

    started_at_utc: str
    ended_at_utc: str
    duration_s: float

    messages: str = ""
    # None means the test declared no result files; do not attach a section.
    result_files: tuple[str, ...] | None = None
    error_message: str | None = None
    data_row_index: int | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is UnitTestOutcome.PASSED


@dataclass(frozen=True, slots=True)
class TestRunResult:
    __test__ = False

    run_id: str
    started_at_utc: str
    ended_at_utc: str
    duration_s: float
    results: list[TestResult] = field(default_factory=list)
    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def all_passed(self) -> bool:
        return bool(self.results) and all(item.passed for item in self.results)
