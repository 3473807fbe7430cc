from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, runtime_checkable

from testctx.contracts.method import TestMethodInfo

TestCallable = Callable[[Any], object]


class TestNotFoundError(KeyError):
    __test__ = False


@runtime_checkable
class TestRegistry(Protocol):
    def get(self, test_key: str) -> TestCallable:
        """Return the test callable for key or raise TestNotFoundError."""
        ...

    def list(self) -> Iterable[TestMethodInfo]:
        """List available tests (for UI / debugging)."""
        ...
