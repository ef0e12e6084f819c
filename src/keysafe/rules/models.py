"""Rule data model — identity, severity, and the literal markers to look for."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from keysafe.config.schema import Severity


@dataclass
class Rule:
    """A single detection rule.

    ``markers`` is an immutable tuple of substrings; a string literal bound
    to a name is flagged when it contains any of them. ``description`` doubles
    as the message attached to every issue the rule raises.
    """

    id: str
    name: str
    description: str
    severity: Severity
    markers: Tuple[str, ...]
    tags: List[str] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        # Accept any iterable from YAML, but never keep a mutable marker list.
        self.markers = tuple(self.markers)
