from __future__ import annotations

import logging
from enum import StrEnum

from testctx.contracts.errors import InconclusiveError

logger = logging.getLogger("testctx.outcome")


class UnitTestOutcome(StrEnum):
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    TIMEOUT = "timeout"
    INCONCLUSIVE = "inconclusive"
    IN_PROGRESS = "in_progress"
    UNKNOWN = "unknown"


def normalize_outcome(outcome: object) -> UnitTestOutcome:
    """
    Map an outcome value onto the runner vocabulary.

    Recognized values map to themselves. Anything else becomes UNKNOWN and is
    logged as an error, since it means the caller handed over a value outside
    the vocabulary.
    """
    if isinstance(outcome, UnitTestOutcome):
        return outcome
    try:
        return UnitTestOutcome(outcome)
    except ValueError:
        logger.error("Unknown outcome %r; recording %s", outcome, UnitTestOutcome.UNKNOWN)
        return UnitTestOutcome.UNKNOWN


def outcome_for_exception(exc: BaseException) -> UnitTestOutcome:
    if isinstance(exc, AssertionError):
        return UnitTestOutcome.FAILED
    if isinstance(exc, InconclusiveError):
        return UnitTestOutcome.INCONCLUSIVE
    if isinstance(exc, TimeoutError):
        return UnitTestOutcome.TIMEOUT
    return UnitTestOutcome.ERROR
