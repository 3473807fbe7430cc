from __future__ import annotations

from enum import StrEnum


class ContextProperty(StrEnum):
    """
    Reserved property keys seeded into every test context.

    Values are the names the runner uses in the initial property mapping.
    """

    TEST_RUN_DIRECTORY = "TestRunDirectory"
    DEPLOYMENT_DIRECTORY = "DeploymentDirectory"
    RESULTS_DIRECTORY = "ResultsDirectory"
    TEST_RUN_RESULTS_DIRECTORY = "TestRunResultsDirectory"
    TEST_RESULTS_DIRECTORY = "TestResultsDirectory"
    TEST_DIR = "TestDir"
    TEST_DEPLOYMENT_DIR = "TestDeploymentDir"
    TEST_LOGS_DIR = "TestLogsDir"

    FULLY_QUALIFIED_TEST_CLASS_NAME = "FullyQualifiedTestClassName"
    TEST_NAME = "TestName"

    @property
    def value_kind(self) -> type:
        """Type a stored value must have to be returned by typed lookups."""
        return str


DIRECTORY_PROPERTIES: tuple[ContextProperty, ...] = (
    ContextProperty.TEST_RUN_DIRECTORY,
    ContextProperty.DEPLOYMENT_DIRECTORY,
    ContextProperty.RESULTS_DIRECTORY,
    ContextProperty.TEST_RUN_RESULTS_DIRECTORY,
    ContextProperty.TEST_RESULTS_DIRECTORY,
    ContextProperty.TEST_DIR,
    ContextProperty.TEST_DEPLOYMENT_DIR,
    ContextProperty.TEST_LOGS_DIR,
)

RESERVED_PROPERTY_NAMES: frozenset[str] = frozenset(str(item) for item in ContextProperty)
