"""Configuration support for the homy interpreter and CLI."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from .errors import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class RuntimeConfig:
    """Evaluation limits and defaults."""

    max_call_depth: int = 100
    # None disables the step guard
    max_steps: Optional[int] = 1_000_000
    default_web_version: str = "1.0"


@dataclass
class LintConfig:
    """Settings for the textual linter."""

    max_line_length: int = 80
    enabled_rules: Optional[Sequence[str]] = None
    disabled_rules: Sequence[str] = field(default_factory=tuple)

    def is_enabled(self, rule_id: str) -> bool:
        if rule_id in self.disabled_rules:
            return False
        if self.enabled_rules is None:
            return True
        return rule_id in self.enabled_rules


@dataclass
class HomyConfig:
    """Resolved configuration for one invocation."""

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    file_extension: str = ".homy"
    log_level: str = "info"
    source: Optional[Path] = None


def _read_toml_config(path: Path) -> Dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(message=f"Invalid TOML: {exc}", path=str(path)) from exc


def _require_int(value: Any, key: str, path: Optional[Path], *, minimum: int = 1) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigError(
            message=f"'{key}' must be an integer >= {minimum}, got {value!r}",
            path=str(path) if path else None,
        )
    return value


def _require_rules(value: Any, key: str, path: Optional[Path]) -> tuple:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise ConfigError(
        message=f"'{key}' must be a list of rule ids, got {value!r}",
        path=str(path) if path else None,
    )


def _parse_runtime(section: Mapping[str, Any], path: Optional[Path]) -> RuntimeConfig:
    runtime = RuntimeConfig()
    if "max_call_depth" in section:
        runtime.max_call_depth = _require_int(section["max_call_depth"], "max_call_depth", path)
    if "max_steps" in section:
        raw = section["max_steps"]
        # 0 in a file means "no limit"
        runtime.max_steps = None if raw == 0 else _require_int(raw, "max_steps", path)
    if "default_web_version" in section:
        runtime.default_web_version = str(section["default_web_version"])
    return runtime


def _parse_lint(section: Mapping[str, Any], path: Optional[Path]) -> LintConfig:
    lint = LintConfig()
    if "max_line_length" in section:
        lint.max_line_length = _require_int(section["max_line_length"], "max_line_length", path)
    if "enabled_rules" in section:
        lint.enabled_rules = _require_rules(section["enabled_rules"], "enabled_rules", path)
    if "disabled_rules" in section:
        lint.disabled_rules = _require_rules(section["disabled_rules"], "disabled_rules", path)
    return lint


def _normalize_log_level(value: Any, path: Optional[Path] = None) -> str:
    level = str(value).strip().lower()
    if level not in LOG_LEVELS:
        raise ConfigError(
            message=f"Unknown log level {value!r}; expected one of {', '.join(LOG_LEVELS)}",
            path=str(path) if path else None,
        )
    return level


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file for ``root``.

    ``homy.toml`` wins over a ``pyproject.toml`` carrying a ``[tool.homy]``
    table. An explicit path that does not exist is an error.
    """
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(message="Configuration file not found", path=str(explicit))
        return explicit
    candidate = root / "homy.toml"
    if candidate.exists():
        return candidate
    pyproject = root / "pyproject.toml"
    if pyproject.exists() and "homy" in _read_toml_config(pyproject).get("tool", {}):
        return pyproject
    return None


def parse_config(data: Mapping[str, Any], path: Optional[Path] = None) -> HomyConfig:
    """Build a :class:`HomyConfig` from an already-decoded table."""
    if path is not None and path.name == "pyproject.toml":
        data = data.get("tool", {}).get("homy", {})

    config = HomyConfig(
        runtime=_parse_runtime(data.get("runtime") or {}, path),
        lint=_parse_lint(data.get("lint") or {}, path),
        source=path,
    )
    extension = data.get("file_extension")
    if extension:
        extension = str(extension)
        config.file_extension = extension if extension.startswith(".") else f".{extension}"
    if "log_level" in data:
        config.log_level = _normalize_log_level(data["log_level"], path)
    return config


def apply_env_overrides(config: HomyConfig, environ: Optional[Mapping[str, str]] = None) -> HomyConfig:
    """Apply ``HOMY_*`` environment variables on top of file configuration."""
    env = os.environ if environ is None else environ

    if env.get("HOMY_LOG_LEVEL"):
        config.log_level = _normalize_log_level(env["HOMY_LOG_LEVEL"])
    if env.get("HOMY_MAX_CALL_DEPTH"):
        config.runtime.max_call_depth = _require_int(
            _env_int(env, "HOMY_MAX_CALL_DEPTH"), "HOMY_MAX_CALL_DEPTH", None
        )
    if env.get("HOMY_MAX_STEPS"):
        steps = _env_int(env, "HOMY_MAX_STEPS")
        config.runtime.max_steps = None if steps == 0 else _require_int(steps, "HOMY_MAX_STEPS", None)
    if env.get("HOMY_MAX_LINE_LENGTH"):
        config.lint.max_line_length = _require_int(
            _env_int(env, "HOMY_MAX_LINE_LENGTH"), "HOMY_MAX_LINE_LENGTH", None
        )
    return config


def _env_int(env: Mapping[str, str], key: str) -> int:
    try:
        return int(env[key])
    except ValueError as exc:
        raise ConfigError(message=f"{key} must be an integer, got {env[key]!r}") from exc


def load_config(
    root: Path,
    config_path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> HomyConfig:
    """Resolve configuration for a project rooted at ``root``."""
    path = locate_config_file(root.resolve(), config_path)
    if path is None:
        config = HomyConfig()
    else:
        config = parse_config(_read_toml_config(path), path)
    return apply_env_overrides(config, environ)


__all__ = [
    "RuntimeConfig",
    "LintConfig",
    "HomyConfig",
    "LOG_LEVELS",
    "locate_config_file",
    "parse_config",
    "apply_env_overrides",
    "load_config",
]
