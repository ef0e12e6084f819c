"""Built-in rules — aggregate all categories."""

from keysafe.rules.builtin.keys import ALL_KEY_RULES
from keysafe.rules.models import Rule

ALL_BUILTIN_RULES: list[Rule] = [
    *ALL_KEY_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
