from pathlib import Path

import pytest
import yaml

from testctx.configuration import ConfigError, load_run_config, resolve_env_vars


def _write_yaml(path: Path, payload) -> Path:
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")
    return path


def test_load_run_config_expands_shorthand_and_env(tmp_path, monkeypatch):
    monkeypatch.setenv("RUN_ROOT", str(tmp_path / "root"))
    config_path = _write_yaml(
        tmp_path / "run.yaml",
        {
            "run": {"run_id": "r1", "tags": {"purpose": "test"}},
            "directories": {"run_root": "${RUN_ROOT}"},
            "properties": {"Browser": "firefox"},
            "tests": ["suite.one", {"key": "suite.rows", "rows": [{"x": 1}]}],
        },
    )

    config = load_run_config(config_path)

    assert config.run.run_id == "r1"
    assert config.directories.run_root == str(tmp_path / "root")
    assert config.properties == {"Browser": "firefox"}
    assert [entry.key for entry in config.tests] == ["suite.one", "suite.rows"]
    assert config.tests[0].rows is None
    assert config.tests[1].rows == [{"x": 1}]


def test_reserved_property_keys_are_rejected(tmp_path):
    config_path = _write_yaml(
        tmp_path / "run.yaml",
        {"properties": {"TestRunDirectory": "/elsewhere"}, "tests": ["suite.one"]},
    )

    with pytest.raises(ConfigError, match="reserved keys"):
        load_run_config(config_path)


def test_tests_must_not_be_empty(tmp_path):
    config_path = _write_yaml(tmp_path / "run.yaml", {"tests": []})

    with pytest.raises(ConfigError, match=r"run\.tests"):
        load_run_config(config_path)


def test_unknown_sections_are_rejected(tmp_path):
    config_path = _write_yaml(tmp_path / "run.yaml", {"tests": ["a"], "deploy": {}})

    with pytest.raises(ConfigError, match=r"run\.deploy"):
        load_run_config(config_path)


def test_yaml_root_must_be_a_mapping(tmp_path):
    config_path = tmp_path / "run.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="YAML root must be a mapping"):
        load_run_config(config_path)


def test_missing_env_var_reports_path(monkeypatch):
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)

    with pytest.raises(ConfigError, match=r"NOT_SET_ANYWHERE' at \$\.directories\.run_root"):
        resolve_env_vars({"directories": {"run_root": "${NOT_SET_ANYWHERE}"}})
