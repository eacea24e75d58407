"""Tests for configuration loading."""

from pathlib import Path

import pytest

from homy.config import (
    HomyConfig,
    LintConfig,
    apply_env_overrides,
    load_config,
    locate_config_file,
    parse_config,
)
from homy.errors import ConfigError


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_no_config_file(self, tmp_path):
        config = load_config(tmp_path, environ={})
        assert config == HomyConfig()
        assert config.runtime.max_call_depth == 100
        assert config.runtime.max_steps == 1_000_000
        assert config.runtime.default_web_version == "1.0"
        assert config.lint.max_line_length == 80
        assert config.file_extension == ".homy"
        assert config.log_level == "info"
        assert config.source is None

    def test_lint_rules_enabled_by_default(self):
        assert LintConfig().is_enabled("line-length")


class TestFiles:
    def test_homy_toml(self, tmp_path):
        path = _write(tmp_path, "homy.toml", """
log_level = "DEBUG"
file_extension = "hm"

[runtime]
max_call_depth = 20
max_steps = 0
default_web_version = "2.0"

[lint]
max_line_length = 100
disabled_rules = ["homy-naming-convention"]
""")
        config = load_config(tmp_path, environ={})
        assert config.source.name == path.name
        assert config.log_level == "debug"
        assert config.file_extension == ".hm"
        assert config.runtime.max_call_depth == 20
        assert config.runtime.max_steps is None
        assert config.runtime.default_web_version == "2.0"
        assert config.lint.max_line_length == 100
        assert not config.lint.is_enabled("homy-naming-convention")

    def test_pyproject_tool_table(self, tmp_path):
        _write(tmp_path, "pyproject.toml", """
[project]
name = "demo"

[tool.homy.lint]
enabled_rules = "trailing-whitespace"
""")
        config = load_config(tmp_path, environ={})
        assert config.lint.enabled_rules == ("trailing-whitespace",)
        assert not config.lint.is_enabled("line-length")

    def test_pyproject_without_table_is_ignored(self, tmp_path):
        _write(tmp_path, "pyproject.toml", '[project]\nname = "demo"\n')
        assert locate_config_file(tmp_path) is None

    def test_homy_toml_wins(self, tmp_path):
        homy_toml = _write(tmp_path, "homy.toml", "")
        _write(tmp_path, "pyproject.toml", "[tool.homy]\nlog_level = 'error'\n")
        assert locate_config_file(tmp_path) == homy_toml

    def test_explicit_path(self, tmp_path):
        path = _write(tmp_path, "custom.toml", "[runtime]\nmax_call_depth = 7\n")
        config = load_config(Path("/"), path, environ={})
        assert config.runtime.max_call_depth == 7

    def test_explicit_path_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, tmp_path / "missing.toml", environ={})

    def test_invalid_toml(self, tmp_path):
        _write(tmp_path, "homy.toml", "[runtime\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, environ={})
        assert "Invalid TOML" in exc_info.value.message

    @pytest.mark.parametrize("data", [
        {"runtime": {"max_call_depth": 0}},
        {"runtime": {"max_call_depth": "deep"}},
        {"runtime": {"max_steps": True}},
        {"lint": {"max_line_length": -1}},
        {"lint": {"disabled_rules": [1, 2]}},
        {"log_level": "loud"},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ConfigError):
            parse_config(data)


class TestEnvironment:
    def test_overrides(self):
        config = apply_env_overrides(HomyConfig(), {
            "HOMY_LOG_LEVEL": "Warning",
            "HOMY_MAX_CALL_DEPTH": "12",
            "HOMY_MAX_STEPS": "0",
            "HOMY_MAX_LINE_LENGTH": "120",
        })
        assert config.log_level == "warning"
        assert config.runtime.max_call_depth == 12
        assert config.runtime.max_steps is None
        assert config.lint.max_line_length == 120

    def test_environment_beats_file(self, tmp_path):
        _write(tmp_path, "homy.toml", "[runtime]\nmax_call_depth = 20\n")
        config = load_config(tmp_path, environ={"HOMY_MAX_CALL_DEPTH": "30"})
        assert config.runtime.max_call_depth == 30

    def test_empty_values_are_ignored(self):
        config = apply_env_overrides(HomyConfig(), {"HOMY_LOG_LEVEL": ""})
        assert config.log_level == "info"

    @pytest.mark.parametrize("key", ["HOMY_MAX_CALL_DEPTH", "HOMY_MAX_STEPS", "HOMY_MAX_LINE_LENGTH"])
    def test_non_integer(self, key):
        with pytest.raises(ConfigError):
            apply_env_overrides(HomyConfig(), {key: "lots"})
