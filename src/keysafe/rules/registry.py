"""Rule registry — loads built-in and custom rules, applies config filters."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from keysafe.config.schema import SEVERITY_ORDER, KeysafeConfig
from keysafe.errors import KeysafeError
from keysafe.rules.models import Rule

logger = logging.getLogger(__name__)

CUSTOM_RULES_DIR = ".keysafe-rules"


class RuleError(KeysafeError):
    """Raised when a custom rule file is malformed."""


class RuleRegistry:
    """Central store for all detection rules."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    # ---- config filtering ----

    def apply_config(self, config: KeysafeConfig) -> None:
        """Enable / disable rules based on config.rules + config.ignore.rules."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable
        ignore_rules = config.ignore.rules

        for rule in self._rules.values():
            # If an explicit enable-list exists, only those are enabled
            if enable_list:
                rule.enabled = rule.id in enable_list
            # Disable list always takes precedence
            if rule.id in disable_list or rule.id in ignore_rules:
                rule.enabled = False

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RuleError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for index, entry in enumerate(data):
            rule = _rule_from_entry(entry, f"{path}[{index}]")
            self.register(rule)
            logger.debug("Loaded custom rule %s from %s", rule.id, path.name)
            count += 1
        return count


def _rule_from_entry(entry: Any, where: str) -> Rule:
    if not isinstance(entry, dict):
        raise RuleError(f"{where}: rule must be a mapping")
    rule_id = entry.get("id")
    if not rule_id:
        raise RuleError(f"{where}: missing 'id'")
    markers = entry.get("markers")
    if not markers or not isinstance(markers, list):
        raise RuleError(f"{where}: rule {rule_id} needs a non-empty 'markers' list")
    if not all(isinstance(m, str) and m for m in markers):
        raise RuleError(f"{where}: rule {rule_id} has a blank or non-string marker")
    severity = entry.get("severity", "high")
    if severity not in SEVERITY_ORDER:
        raise RuleError(f"{where}: rule {rule_id} has unknown severity {severity!r}")
    tags = entry.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, list):
        raise RuleError(f"{where}: rule {rule_id} 'tags' must be a list")
    return Rule(
        id=str(rule_id),
        name=str(entry.get("name", rule_id)),
        description=str(entry.get("description", f"{rule_id} marker found in a string literal.")),
        severity=severity,
        markers=tuple(markers),
        tags=[str(t) for t in tags],
    )


def build_registry(config: KeysafeConfig, root: Path) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from keysafe.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    # Copies, so config filtering never leaks into the module-level rules
    registry.register_many([dataclasses.replace(r) for r in ALL_BUILTIN_RULES])

    # Custom rules from .keysafe-rules/
    loaded = registry.load_custom_rules(root / CUSTOM_RULES_DIR)
    if loaded:
        logger.info("Loaded %d custom rule(s)", loaded)

    # Apply enable/disable from config
    registry.apply_config(config)

    return registry
