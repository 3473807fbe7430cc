from __future__ import annotations

import argparse
import logging
from pathlib import Path

from testctx import run_from_yaml
from testctx.orchestration.registry import DictTestRegistry
from suites.smoke_suite import build_smoke_tests


def build_registry() -> DictTestRegistry:
    return DictTestRegistry(tests=build_smoke_tests())


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run registered tests from a YAML config.")
    parser.add_argument("base_yaml", type=Path, help="Path to run YAML")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    run_result = run_from_yaml(args.base_yaml, registry=build_registry())
    for result in run_result.results:
        print(f"[{result.outcome}] {result.full_class_name}.{result.test_name}")
    print(run_result.metadata.get("summary_path"))
    raise SystemExit(0 if run_result.all_passed else 1)


if __name__ == "__main__":
    main()
