from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from testctx.contracts.errors import UnsupportedOperationError
from testctx.contracts.method import TestMethod
from testctx.contracts.outcome import UnitTestOutcome, normalize_outcome
from testctx.contracts.properties import ContextProperty
from testctx.runtime.messages import MessageBuffer, TextSink
from testctx.runtime.properties import PropertyStore
from testctx.runtime.result_files import ResultFileTracker


class TestContext:
    """
    Per-test execution context handed to a running test body.

    Gives the test read access to run directories and its own identity, and
    collects what the test reports back: message lines, result files and,
    once the runner has a verdict, the outcome. For data-driven tests the
    orchestrator also parks the current data connection and row here.

    Single-threaded by contract; the only tolerated race is the runner closing
    the message sink while a late write is still in flight.
    """

    __test__ = False

    def __init__(
        self,
        test_method: TestMethod,
        sink: TextSink,
        properties: Mapping[str, Any],
    ) -> None:
        self._test_method = test_method
        self._properties = PropertyStore(properties)
        self._messages = MessageBuffer(sink)
        self._result_files = ResultFileTracker()
        self._outcome: UnitTestOutcome | None = None
        self._data_connection: Any = None
        self._data_row: Any = None

        # The bound method always wins over whatever the caller supplied.
        self._properties.set(
            ContextProperty.FULLY_QUALIFIED_TEST_CLASS_NAME, test_method.full_class_name
        )
        self._properties.set(ContextProperty.TEST_NAME, test_method.name)

    def __repr__(self) -> str:
        return (
            f"TestContext(test={self.fully_qualified_test_class_name}.{self.test_name}, "
            f"outcome={self._outcome})"
        )

    # Properties

    @property
    def properties(self) -> Mapping[str, Any]:
        return self._properties.view

    def get_property(self, name: str) -> tuple[Any, bool]:
        """Return (value, found) for a property; never raises for a missing key."""
        return self._properties.get(name)

    def get_string_property(self, name: str) -> str | None:
        """Return the property as a string, or None if it is absent or not a string."""
        return self._properties.get_string(name)

    def get_well_known(self, key: ContextProperty) -> Any:
        return self._properties.get_well_known(key)

    def add_property(self, name: str, value: Any) -> None:
        """
        Add a new property.

        Raises InvalidArgumentError for an empty name and DuplicatePropertyError
        if the name is already present; the store is left unchanged either way.
        """
        self._properties.add(name, value)

    @property
    def test_run_directory(self) -> str | None:
        """Base directory of the run, holding deployed files and results."""
        return self.get_well_known(ContextProperty.TEST_RUN_DIRECTORY)

    @property
    def deployment_directory(self) -> str | None:
        return self.get_well_known(ContextProperty.DEPLOYMENT_DIRECTORY)

    @property
    def results_directory(self) -> str | None:
        return self.get_well_known(ContextProperty.RESULTS_DIRECTORY)

    @property
    def test_run_results_directory(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_RUN_RESULTS_DIRECTORY)

    @property
    def test_results_directory(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_RESULTS_DIRECTORY)

    @property
    def test_dir(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_DIR)

    @property
    def test_deployment_dir(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_DEPLOYMENT_DIR)

    @property
    def test_logs_dir(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_LOGS_DIR)

    @property
    def fully_qualified_test_class_name(self) -> str | None:
        return self.get_well_known(ContextProperty.FULLY_QUALIFIED_TEST_CLASS_NAME)

    @property
    def test_name(self) -> str | None:
        return self.get_well_known(ContextProperty.TEST_NAME)

    # Messages

    def write_line(self, message: str | None, *args: Any, **kwargs: Any) -> None:
        """
        Append a line to the test's message log.

        With extra arguments the message is treated as a str.format template.
        NUL characters are written as the two characters backslash-zero.
        After the sink has been closed this is a silent no-op.
        """
        self._messages.write_line(message, *args, **kwargs)

    @property
    def messages(self) -> str:
        return self._messages.messages

    def clear_messages(self) -> None:
        self._messages.clear()

    # Result files

    def add_result_file(self, path: str | os.PathLike[str]) -> None:
        self._result_files.add(path)

    def get_result_files(self) -> list[str] | None:
        """
        Hand out the recorded result files and reset the list.

        Returns None when no files were added since the previous call.
        """
        return self._result_files.drain()

    # Outcome and data

    @property
    def current_test_outcome(self) -> UnitTestOutcome | None:
        """Last outcome set by the runner, or None before the first one."""
        return self._outcome

    def set_outcome(self, outcome: UnitTestOutcome | str) -> None:
        self._outcome = normalize_outcome(outcome)

    @property
    def data_connection(self) -> Any:
        return self._data_connection

    def set_data_connection(self, connection: Any) -> None:
        # Borrowed: the data-driven orchestrator opens and closes it.
        self._data_connection = connection

    @property
    def data_row(self) -> Any:
        return self._data_row

    def set_data_row(self, row: Any) -> None:
        self._data_row = row

    # Unsupported

    def begin_timer(self, timer_name: str) -> None:
        raise UnsupportedOperationError("Timers are not supported by this test context")

    def end_timer(self, timer_name: str) -> None:
        raise UnsupportedOperationError("Timers are not supported by this test context")
