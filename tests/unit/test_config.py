"""Tests for core/config.py."""

from __future__ import annotations

from pathlib import Path

from eaacheck.core.config import deep_merge, get_effective_config, load_project_config, resolve_path


class TestDeepMerge:
    def test_simple_merge(self):
        base = {"a": 1, "b": 2}
        override = {"b": 3, "c": 4}
        result = deep_merge(base, override)
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self):
        base = {"scoring": {"weights": {"HIGH": 3, "LOW": 1}}}
        override = {"scoring": {"weights": {"HIGH": 5}}}
        result = deep_merge(base, override)
        assert result["scoring"]["weights"] == {"HIGH": 5, "LOW": 1}

    def test_arrays_replaced(self):
        base = {"formats": ["markdown", "json"]}
        override = {"formats": ["junit"]}
        result = deep_merge(base, override)
        assert result["formats"] == ["junit"]

    def test_base_not_mutated(self):
        base = {"a": {"b": 1}}
        override = {"a": {"b": 2}}
        deep_merge(base, override)
        assert base["a"]["b"] == 1


class TestLoadProjectConfig:
    def test_loads_yaml(self, initialized_project: Path):
        config = load_project_config(initialized_project)
        assert config["project"]["name"] == "test-project"
        assert config["ci"]["fail_under"] == 60

    def test_missing_config_returns_empty(self, tmp_project: Path):
        assert load_project_config(tmp_project) == {}

    def test_empty_config_returns_empty(self, tmp_project: Path):
        cc = tmp_project / ".eaacheck"
        cc.mkdir()
        (cc / "config.yaml").write_text("", encoding="utf-8")
        assert load_project_config(tmp_project) == {}

    def test_invalid_yaml_returns_empty(self, tmp_project: Path):
        cc = tmp_project / ".eaacheck"
        cc.mkdir()
        (cc / "config.yaml").write_text("project: [unclosed", encoding="utf-8")
        assert load_project_config(tmp_project) == {}


class TestGetEffectiveConfig:
    def test_defaults_applied(self, tmp_project: Path):
        config = get_effective_config(tmp_project)
        assert config["output"]["format"] == "markdown"
        assert config["scoring"]["weights"] == {"HIGH": 3, "MEDIUM": 2, "LOW": 1}
        assert config["ci"]["fail_under"] == 0

    def test_project_overrides_defaults(self, initialized_project: Path):
        config = get_effective_config(initialized_project)
        assert config["ci"]["fail_under"] == 60
        assert config["ci"]["exit_codes"]["fail"] == 1
        assert config["ci"]["exit_codes"]["error"] == 3

    def test_cli_overrides_project(self, initialized_project: Path):
        config = get_effective_config(initialized_project, cli_overrides={"ci": {"fail_under": 90}})
        assert config["ci"]["fail_under"] == 90

    def test_project_path_recorded(self, tmp_project: Path):
        config = get_effective_config(tmp_project)
        assert config["_project_path"] == str(tmp_project)


class TestResolvePath:
    def test_relative_to_project(self, tmp_project: Path):
        config = get_effective_config(tmp_project)
        assert resolve_path(config, "custom.yaml") == tmp_project / "custom.yaml"

    def test_absolute_kept(self, tmp_project: Path, tmp_path: Path):
        config = get_effective_config(tmp_project)
        target = tmp_path / "elsewhere.yaml"
        assert resolve_path(config, str(target)) == target

    def test_empty_is_none(self, tmp_project: Path):
        assert resolve_path(get_effective_config(tmp_project), None) is None
