from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from testctx.configuration import dump_yaml, load_run_config
from testctx.contracts import (
    ContextProperty,
    RunConfig,
    TestCallable,
    TestEntryConfig,
    TestMethod,
    TestMethodInfo,
    TestNotFoundError,
    TestRegistry,
    TestResult,
    TestRunResult,
    UnitTestOutcome,
    outcome_for_exception,
)
from testctx.runtime.context import TestContext
from testctx.runtime.directories import build_run_directories
from testctx.runtime.messages import MessageWriter, TextSink

CleanupCallable = Callable[[TestContext], object]

_CURRENT_CONTEXT: ContextVar[TestContext | None] = ContextVar(
    "testctx_current_context", default=None
)


def current_context() -> TestContext:
    """Return the context of the test currently executing."""
    context = _CURRENT_CONTEXT.get()
    if context is None:
        raise RuntimeError("No test context is active. Run the test through run_test().")
    return context


@contextmanager
def context_scope(context: TestContext) -> Iterator[TestContext]:
    token = _CURRENT_CONTEXT.set(context)
    try:
        yield context
    finally:
        _CURRENT_CONTEXT.reset(token)


def run_test(
    test: TestCallable,
    *,
    method: TestMethod | None = None,
    properties: Mapping[str, Any] | None = None,
    cleanup: CleanupCallable | None = None,
    sink: TextSink | None = None,
) -> TestResult:
    """Run a single test body against a fresh context and collect its result."""
    writer = sink if sink is not None else MessageWriter()
    context = TestContext(
        method or TestMethodInfo.from_callable(test),
        writer,
        properties or {},
    )
    try:
        return _execute(test, context, cleanup=cleanup)
    finally:
        writer.close()


def run_data_driven_test(
    test: TestCallable,
    rows: Iterable[Any],
    *,
    connection: Any = None,
    method: TestMethod | None = None,
    properties: Mapping[str, Any] | None = None,
    cleanup: CleanupCallable | None = None,
    sink: TextSink | None = None,
) -> list[TestResult]:
    """
    Run a test once per data row, reusing one context for every row.

    Messages are cleared and result files drained between rows so each result
    only carries what its own row produced. `connection` is borrowed: the
    caller opens and closes it.
    """
    writer = sink if sink is not None else MessageWriter()
    context = TestContext(
        method or TestMethodInfo.from_callable(test),
        writer,
        properties or {},
    )
    context.set_data_connection(connection)
    results: list[TestResult] = []
    try:
        for index, row in enumerate(rows):
            context.set_data_row(row)
            context.clear_messages()
            results.append(_execute(test, context, cleanup=cleanup, data_row_index=index))
    finally:
        context.set_data_row(None)
        writer.close()
    return results


def run_from_yaml(
    base_yaml: str | Path,
    *,
    registry: TestRegistry,
) -> TestRunResult:
    run_config = load_run_config(base_yaml)
    return run_config_tests(run_config, registry=registry)


def run_config_tests(run_config: RunConfig, *, registry: TestRegistry) -> TestRunResult:
    run_id = run_config.run.run_id or _new_run_id()
    run_root = Path(run_config.directories.run_root) if run_config.directories.run_root else None
    directories = build_run_directories(run_id, run_root=run_root)
    run_dir = Path(directories[ContextProperty.TEST_RUN_DIRECTORY])
    properties = {**run_config.properties, **directories}

    logger = logging.getLogger(f"testctx.run.{run_id}")
    _write_resolved_config_best_effort(run_dir=run_dir, run_config=run_config)

    started = datetime.now(UTC)
    results: list[TestResult] = []
    for entry in run_config.tests:
        logger.info("Running %s", entry.key)
        results.extend(_run_entry(entry, registry=registry, properties=properties))
    ended = datetime.now(UTC)

    metadata: dict[str, Any] = {"run_dir": str(run_dir), "tags": dict(run_config.run.tags)}
    run_result = TestRunResult(
        run_id=run_id,
        started_at_utc=started.isoformat(),
        ended_at_utc=ended.isoformat(),
        duration_s=(ended - started).total_seconds(),
        results=results,
        metadata=metadata,
    )
    summary_path = _write_run_summary_best_effort(run_dir=run_dir, run_result=run_result)
    if summary_path is not None:
        metadata["summary_path"] = str(summary_path)
    return run_result


def _run_entry(
    entry: TestEntryConfig,
    *,
    registry: TestRegistry,
    properties: Mapping[str, Any],
) -> list[TestResult]:
    try:
        test = registry.get(entry.key)
    except TestNotFoundError:
        now = datetime.now(UTC).isoformat()
        return [
            TestResult(
                full_class_name="",
                test_name=entry.key,
                outcome=UnitTestOutcome.ERROR,
                started_at_utc=now,
                ended_at_utc=now,
                duration_s=0.0,
                error_message=f"Test not found: {entry.key}",
            )
        ]

    if entry.rows is None:
        return [run_test(test, properties=properties)]
    return run_data_driven_test(test, entry.rows, properties=properties)


def _execute(
    test: TestCallable,
    context: TestContext,
    *,
    cleanup: CleanupCallable | None,
    data_row_index: int | None = None,
) -> TestResult:
    start = datetime.now(UTC)
    error_message: str | None = None
    context.set_outcome(UnitTestOutcome.IN_PROGRESS)

    with context_scope(context):
        try:
            test(context)
        except Exception as exc:
            outcome = outcome_for_exception(exc)
            error_message = f"{type(exc).__name__}: {exc}"
        else:
            outcome = UnitTestOutcome.PASSED
        context.set_outcome(outcome)

        if cleanup is not None:
            try:
                cleanup(context)
            except Exception as exc:
                logging.getLogger("testctx.cleanup").warning(
                    "Cleanup failed for %s", context.test_name, exc_info=True
                )
                if outcome is UnitTestOutcome.PASSED:
                    outcome = UnitTestOutcome.ERROR
                    error_message = f"Cleanup failed: {type(exc).__name__}: {exc}"
                    context.set_outcome(outcome)

    end = datetime.now(UTC)
    result_files = context.get_result_files()
    return TestResult(
        full_class_name=context.fully_qualified_test_class_name or "",
        test_name=context.test_name or "",
        outcome=outcome,
        started_at_utc=start.isoformat(),
        ended_at_utc=end.isoformat(),
        duration_s=(end - start).total_seconds(),
        messages=context.messages,
        result_files=tuple(result_files) if result_files is not None else None,
        error_message=error_message,
        data_row_index=data_row_index,
    )


def _new_run_id() -> str:
    return f"run-{datetime.now(UTC).strftime('%Y%m%dT%H%M%S')}-{uuid.uuid4().hex[:8]}"


def _write_resolved_config_best_effort(*, run_dir: Path, run_config: RunConfig) -> None:
    try:
        dump_yaml(run_dir / "resolved" / "run_config.yaml", run_config.model_dump(mode="json"))
    except Exception:
        logging.getLogger("testctx.run_artifacts").warning(
            "Failed to write resolved config for %s", run_dir, exc_info=True
        )


def _write_run_summary_best_effort(*, run_dir: Path, run_result: TestRunResult) -> Path | None:
    try:
        summary_path = run_dir / "summary" / "run_summary.json"
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary = {
            "run_id": run_result.run_id,
            "started_at_utc": run_result.started_at_utc,
            "ended_at_utc": run_result.ended_at_utc,
            "duration_s": run_result.duration_s,
            "all_passed": run_result.all_passed,
            "results": [asdict(item) for item in run_result.results],
        }
        with summary_path.open("w", encoding="utf-8") as handle:
            json.dump(summary, handle, indent=2, sort_keys=True, default=str)
        return summary_path
    except Exception:
        logging.getLogger("testctx.run_artifacts").warning(
            "Failed to write run summary for %s", run_result.run_id, exc_info=True
        )
        return None
