from .errors import (
    DuplicatePropertyError,
    InconclusiveError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from .method import TestMethod, TestMethodInfo
from .outcome import UnitTestOutcome, normalize_outcome, outcome_for_exception
from .properties import (
    DIRECTORY_PROPERTIES,
    RESERVED_PROPERTY_NAMES,
    ContextProperty,
)
from .registry import TestCallable, TestNotFoundError, TestRegistry
from .result import TestResult, TestRunResult
from .run_config import DirectoriesConfig, RunConfig, RunConfigMeta, TestEntryConfig

__all__ = [
    "ContextProperty",
    "DIRECTORY_PROPERTIES",
    "RESERVED_PROPERTY_NAMES",
    "UnitTestOutcome",
    "normalize_outcome",
    "outcome_for_exception",
    "TestMethod",
    "TestMethodInfo",
    "TestResult",
    "TestRunResult",
    "TestCallable",
    "TestRegistry",
    "TestNotFoundError",
    "RunConfig",
    "RunConfigMeta",
    "DirectoriesConfig",
    "TestEntryConfig",
    "InvalidArgumentError",
    "DuplicatePropertyError",
    "UnsupportedOperationError",
    "InconclusiveError",
]
