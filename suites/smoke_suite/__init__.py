from __future__ import annotations

from pathlib import Path

from testctx import TestContext, current_context


class SmokeTests:
    """Evergreen tests that touch every part of the context."""

    def writes_report(self, context: TestContext) -> None:
        results_dir = Path(context.test_results_directory or ".")
        results_dir.mkdir(parents=True, exist_ok=True)
        report = results_dir / f"{context.test_name}.txt"
        report.write_text("hello from smoke test\n", encoding="utf-8")

        context.write_line("Wrote {}", report.name)
        context.add_result_file(report)

    def reads_identity(self, context: TestContext) -> None:
        assert context.fully_qualified_test_class_name == f"{__name__}.SmokeTests"
        assert current_context() is context
        context.write_line(
            "Identity: {}.{}", context.fully_qualified_test_class_name, context.test_name
        )

    def checks_row(self, context: TestContext) -> None:
        row = context.data_row
        context.write_line("Row {}", row)
        assert row["left"] + row["right"] == row["total"]


def build_smoke_tests() -> dict[str, object]:
    suite = SmokeTests()
    return {
        "smoke.writes_report": suite.writes_report,
        "smoke.reads_identity": suite.reads_identity,
        "smoke.checks_row": suite.checks_row,
    }
