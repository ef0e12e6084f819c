"""Configuration loading, schema, and defaults."""

from keysafe.config.loader import ConfigError, load_config
from keysafe.config.schema import KeysafeConfig, Severity, severity_at_or_above

__all__ = [
    "ConfigError",
    "KeysafeConfig",
    "Severity",
    "load_config",
    "severity_at_or_above",
]
