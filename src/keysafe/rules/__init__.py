"""Rule engine — models, registry, built-in rules."""

from keysafe.rules.models import Rule
from keysafe.rules.registry import RuleError, RuleRegistry, build_registry

__all__ = ["Rule", "RuleError", "RuleRegistry", "build_registry"]
