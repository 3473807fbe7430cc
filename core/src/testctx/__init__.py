"""Per-test execution context for a unit-test runner."""

from testctx.api import (
    context_scope,
    current_context,
    run_data_driven_test,
    run_from_yaml,
    run_test,
)
from testctx.contracts import (
    ContextProperty,
    DuplicatePropertyError,
    InconclusiveError,
    InvalidArgumentError,
    TestMethodInfo,
    TestResult,
    TestRunResult,
    UnitTestOutcome,
    UnsupportedOperationError,
)
from testctx.runtime import MessageWriter, TestContext

__all__ = [
    "TestContext",
    "MessageWriter",
    "ContextProperty",
    "UnitTestOutcome",
    "TestMethodInfo",
    "TestResult",
    "TestRunResult",
    "InvalidArgumentError",
    "DuplicatePropertyError",
    "UnsupportedOperationError",
    "InconclusiveError",
    "current_context",
    "context_scope",
    "run_test",
    "run_data_driven_test",
    "run_from_yaml",
]
