import pytest

from testctx import (
    ContextProperty,
    DuplicatePropertyError,
    InvalidArgumentError,
    MessageWriter,
    TestContext,
)
from testctx.contracts import DIRECTORY_PROPERTIES, TestMethodInfo

METHOD = TestMethodInfo(full_class_name="pkg.module.ExampleTests", name="test_example")

ACCESSORS = {
    ContextProperty.TEST_RUN_DIRECTORY: "test_run_directory",
    ContextProperty.DEPLOYMENT_DIRECTORY: "deployment_directory",
    ContextProperty.RESULTS_DIRECTORY: "results_directory",
    ContextProperty.TEST_RUN_RESULTS_DIRECTORY: "test_run_results_directory",
    ContextProperty.TEST_RESULTS_DIRECTORY: "test_results_directory",
    ContextProperty.TEST_DIR: "test_dir",
    ContextProperty.TEST_DEPLOYMENT_DIR: "test_deployment_dir",
    ContextProperty.TEST_LOGS_DIR: "test_logs_dir",
}


def _context(properties=None) -> TestContext:
    return TestContext(METHOD, MessageWriter(), properties or {})


@pytest.mark.parametrize("key", DIRECTORY_PROPERTIES)
def test_directory_accessors_read_supplied_values(key):
    context = _context({str(key): f"/runs/{key}"})

    assert context.get_property(str(key)) == (f"/runs/{key}", True)
    assert getattr(context, ACCESSORS[key]) == f"/runs/{key}"


@pytest.mark.parametrize("key", DIRECTORY_PROPERTIES)
def test_directory_accessors_return_none_when_unconfigured(key):
    context = _context()

    assert getattr(context, ACCESSORS[key]) is None


def test_non_string_directory_value_reads_as_none():
    context = _context({"TestRunDirectory": 42})

    assert context.test_run_directory is None
    assert context.get_string_property("TestRunDirectory") is None
    assert context.get_property("TestRunDirectory") == (42, True)


def test_identity_properties_come_from_test_method():
    context = _context(
        {
            "FullyQualifiedTestClassName": "caller.Supplied",
            "TestName": "caller_supplied",
        }
    )

    assert context.fully_qualified_test_class_name == "pkg.module.ExampleTests"
    assert context.test_name == "test_example"
    assert context.get_property("TestName") == ("test_example", True)


def test_initial_properties_are_copied():
    initial = {"TestDir": "/runs/one"}
    context = _context(initial)

    initial["TestDir"] = "/runs/two"
    initial["Extra"] = "late"

    assert context.test_dir == "/runs/one"
    assert context.get_property("Extra") == (None, False)


def test_missing_property_is_not_an_error():
    context = _context()

    assert context.get_property("Nope") == (None, False)
    assert context.get_string_property("Nope") is None


def test_property_names_are_case_sensitive():
    context = _context({"testdir": "/lower"})

    assert context.test_dir is None
    assert context.get_property("testdir") == ("/lower", True)


def test_add_property_rejects_duplicates_and_keeps_first_value():
    context = _context()
    context.add_property("X", "v1")

    with pytest.raises(DuplicatePropertyError, match="'X' already exists"):
        context.add_property("X", "v2")

    assert context.get_property("X") == ("v1", True)


def test_add_property_rejects_seeded_keys():
    context = _context()

    with pytest.raises(DuplicatePropertyError):
        context.add_property("TestName", "other")

    assert context.test_name == "test_example"


@pytest.mark.parametrize("name", ["", None])
def test_add_property_requires_a_name(name):
    context = _context()

    with pytest.raises(InvalidArgumentError):
        context.add_property(name, "value")


def test_non_string_initial_key_is_rejected():
    with pytest.raises(InvalidArgumentError, match="must be strings"):
        _context({1: "one"})


def test_add_property_rejects_non_string_names():
    context = _context()

    with pytest.raises(InvalidArgumentError, match="must be strings"):
        context.add_property(5, "value")

    assert context.get_property(5) == (None, False)
    assert context.get_property("5") == (None, False)


def test_properties_view_is_read_only_and_live():
    context = _context()
    view = context.properties

    with pytest.raises(TypeError):
        view["X"] = "v"  # type: ignore[index]

    context.add_property("X", "v")
    assert view["X"] == "v"


def test_enum_members_work_as_keys():
    context = _context({ContextProperty.RESULTS_DIRECTORY: "/runs/In"})

    assert context.results_directory == "/runs/In"
    assert context.get_well_known(ContextProperty.RESULTS_DIRECTORY) == "/runs/In"
    assert "ResultsDirectory" in context.properties
