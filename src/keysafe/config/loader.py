"""Load and merge configuration from .keysafe.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from keysafe.config.schema import (
    LOG_LEVELS,
    SEVERITY_ORDER,
    CIConfig,
    IgnoreConfig,
    KeysafeConfig,
    LoggingConfig,
    OutputConfig,
    RulesConfig,
    ScanConfig,
)
from keysafe.errors import KeysafeError

CONFIG_FILENAME = ".keysafe.toml"


class ConfigError(KeysafeError):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: KeysafeConfig) -> None:
    """Apply KEYSAFE_* environment variable overrides."""
    if val := os.environ.get("KEYSAFE_FAIL_ON"):
        if val in SEVERITY_ORDER:
            cfg.scan.fail_on = val  # type: ignore[assignment]
    if val := os.environ.get("KEYSAFE_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("KEYSAFE_IGNORE_PATHS"):
        cfg.ignore.paths.extend(p.strip() for p in val.split(os.pathsep) if p.strip())
    if val := os.environ.get("KEYSAFE_MAX_FINDINGS"):
        try:
            cfg.ci.max_findings = int(val)
        except ValueError:
            pass
    if val := os.environ.get("KEYSAFE_LOG_LEVEL"):
        if val.upper() in LOG_LEVELS:
            cfg.logging.level = val.upper()


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: KeysafeConfig) -> None:
    if cfg.scan.fail_on not in SEVERITY_ORDER:
        raise ConfigError(f"Invalid scan.fail_on: {cfg.scan.fail_on!r}")
    if cfg.scan.max_file_size_kb <= 0:
        raise ConfigError("scan.max_file_size_kb must be positive")
    if str(cfg.logging.level).upper() not in LOG_LEVELS:
        raise ConfigError(f"Invalid logging.level: {cfg.logging.level!r}")
    cfg.logging.level = str(cfg.logging.level).upper()


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> KeysafeConfig:
    """Load, validate, and return a KeysafeConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = KeysafeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = KeysafeConfig(
            version=raw.get("version", "1.0"),
            scan=_build_section(raw, ScanConfig, "scan"),
            output=_build_section(raw, OutputConfig, "output"),
            rules=_build_section(raw, RulesConfig, "rules"),
            ignore=_build_section(raw, IgnoreConfig, "ignore"),
            ci=_build_section(raw, CIConfig, "ci"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
