from __future__ import annotations

import logging

from testctx import run_data_driven_test, run_test
from testctx.runtime.directories import build_run_directories
from suites.smoke_suite import SmokeTests


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    properties = build_run_directories("smoke")
    suite = SmokeTests()

    print(run_test(suite.writes_report, properties=properties))
    print(run_test(suite.reads_identity, properties=properties))
    rows = [{"left": 1, "right": 2, "total": 3}, {"left": 2, "right": 2, "total": 4}]
    for result in run_data_driven_test(suite.checks_row, rows, properties=properties):
        print(result)


if __name__ == "__main__":
    main()
