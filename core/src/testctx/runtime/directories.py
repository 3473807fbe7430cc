from __future__ import annotations

import os
import tempfile
from pathlib import Path

from testctx.contracts.properties import ContextProperty

_ENV_RUN_ROOT = "TESTCTX_RUN_ROOT"
_LOCAL_RUN_DIRNAME = ".testruns"
_TEMP_RUN_DIRNAME = "testctx-runs"
_DEPLOYMENT_DIRNAME = "Out"
_RESULTS_DIRNAME = "In"


def resolve_run_root() -> Path:
    """Resolve a writable run root directory and ensure it exists."""
    candidates: list[Path] = []

    env_value = os.environ.get(_ENV_RUN_ROOT)
    if env_value:
        candidates.append(Path(env_value).expanduser())

    candidates.append(Path.cwd() / _LOCAL_RUN_DIRNAME)
    candidates.append(Path(tempfile.gettempdir()) / _TEMP_RUN_DIRNAME)

    for candidate in candidates:
        if _ensure_writable_dir(candidate):
            return candidate

    raise RuntimeError("Unable to resolve a writable run root directory.")


def build_run_directories(run_id: str, *, run_root: Path | None = None) -> dict[str, str]:
    """
    Create the directory layout for a run and return it as context properties.

    <root>/runs/<run_id> is the run directory; deployed files go to Out and
    results and logs to In.
    """
    root = run_root if run_root is not None else resolve_run_root()
    run_dir = root / "runs" / run_id
    deployment_dir = run_dir / _DEPLOYMENT_DIRNAME
    results_dir = run_dir / _RESULTS_DIRNAME
    for path in (deployment_dir, results_dir):
        path.mkdir(parents=True, exist_ok=True)

    return {
        ContextProperty.TEST_RUN_DIRECTORY: str(run_dir),
        ContextProperty.DEPLOYMENT_DIRECTORY: str(deployment_dir),
        ContextProperty.RESULTS_DIRECTORY: str(results_dir),
        ContextProperty.TEST_RUN_RESULTS_DIRECTORY: str(results_dir),
        ContextProperty.TEST_RESULTS_DIRECTORY: str(results_dir),
        ContextProperty.TEST_DIR: str(run_dir),
        ContextProperty.TEST_DEPLOYMENT_DIR: str(deployment_dir),
        ContextProperty.TEST_LOGS_DIR: str(results_dir),
    }


def _ensure_writable_dir(path: Path) -> bool:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False

    return _validate_writable(path)


def _validate_writable(path: Path) -> bool:
    test_file = path / ".write_test"
    try:
        with test_file.open("w", encoding="utf-8") as handle:
            handle.write("ok")
        test_file.unlink(missing_ok=True)
        return True
    except OSError:
        return False
