"""Inline suppression and .keysafeignore support.

Suppression conventions:
  - ``// keysafe-ignore`` on line N suppresses ALL rules on line N.
  - ``// keysafe-ignore`` as a standalone comment on line N suppresses line N+1.
  - ``// keysafe-ignore[RULE_A,RULE_B]`` suppresses only those rules.
  - ``/* keysafe-ignore */`` works anywhere a line comment does.
  - ``// NOSONAR`` is supported as a shorthand for ``// keysafe-ignore``.

.keysafeignore file format:
  - One path glob per line (gitignore-style).
  - Lines starting with ``#`` are comments.
  - ``rule:RULE_ID path/glob`` scopes an ignore to a specific rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

IGNORE_FILENAME = ".keysafeignore"

_SUPPRESS_RE = re.compile(
    r"(?://|/\*)\s*(?:keysafe-ignore|NOSONAR)"
    r"(?:\[([A-Za-z0-9_,\s-]+)\])?"  # optional [RULE_A, RULE_B]
    r"\s*(?:\*/)?\s*$"
)

_Entry = Tuple[bool, Optional[FrozenSet[str]]]


@dataclass(frozen=True)
class Suppression:
    """Audit record of a suppressed issue."""

    rule_id: str
    file: str
    line_no: int
    reason: str  # 'inline', 'next-line', 'keysafeignore'
    source: str  # e.g. '// keysafe-ignore[PRIVATE_KEYS]' or '.keysafeignore'


def parse_inline_suppression(line_content: str) -> _Entry:
    """Parse a line for ``keysafe-ignore`` / ``NOSONAR`` comments.

    Returns:
        (is_suppressed, rule_ids) — *rule_ids* is None to suppress ALL rules,
        or a frozenset of specific IDs.
    """
    m = _SUPPRESS_RE.search(line_content)
    if m is None:
        return False, None
    scope = m.group(1)
    if scope:
        ids = frozenset(r.strip() for r in scope.split(",") if r.strip())
        return True, ids
    return True, None  # suppress all


def is_pure_comment(line_content: str) -> bool:
    """Return True if the line holds nothing but a comment."""
    stripped = line_content.strip()
    return stripped.startswith("//") or stripped.startswith("/*")


class SuppressionChecker:
    """Check whether an issue should be suppressed based on inline comments."""

    def __init__(self) -> None:
        # file -> line_no -> (entry, reason)
        self._line_suppressions: Dict[str, Dict[int, Tuple[_Entry, str]]] = {}

    def register_source(self, file: str, text: str) -> None:
        """Pre-scan the full source of *file* for suppression markers."""
        mapping: Dict[int, Tuple[_Entry, str]] = {}
        pending: Optional[_Entry] = None

        for line_no, content in enumerate(text.splitlines(), 1):
            entry = parse_inline_suppression(content)

            if entry[0]:
                mapping[line_no] = (entry, "inline")
                # A standalone comment also covers the NEXT line
                pending = entry if is_pure_comment(content) else None
            else:
                if pending is not None:
                    mapping[line_no] = (pending, "next-line")
                pending = None

        if mapping:
            self._line_suppressions[file] = mapping

    def suppression_for(
        self, file: str, first_line: int, last_line: int, rule_id: str
    ) -> Optional[Suppression]:
        """Return the first suppression found on any line of a node's span."""
        for line_no in range(first_line, max(first_line, last_line) + 1):
            sup = self.is_suppressed(file, line_no, rule_id)
            if sup is not None:
                return sup
        return None

    def is_suppressed(self, file: str, line_no: int, rule_id: str) -> Optional[Suppression]:
        """Return a Suppression record if the issue should be suppressed, else None."""
        found = self._line_suppressions.get(file, {}).get(line_no)
        if found is None:
            return None
        (_, specific_ids), reason = found
        if specific_ids is None:
            source = "// keysafe-ignore"
        elif rule_id in specific_ids:
            source = f"// keysafe-ignore[{rule_id}]"
        else:
            return None
        return Suppression(
            rule_id=rule_id,
            file=file,
            line_no=line_no,
            reason=reason,
            source=source,
        )


class KeysafeIgnore:
    """Parse and evaluate a .keysafeignore file."""

    def __init__(self) -> None:
        self._global_patterns: List[str] = []
        self._rule_patterns: Dict[str, List[str]] = {}  # rule_id -> [glob, ...]

    @classmethod
    def from_file(cls, path: Path) -> "KeysafeIgnore":
        """Load a .keysafeignore file."""
        instance = cls()
        if not path.is_file():
            return instance
        with open(path, encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                # rule-scoped: "rule:RULE_ID path/glob"
                if line.startswith("rule:"):
                    parts = line.split(None, 1)
                    if len(parts) == 2:
                        rule_id = parts[0].removeprefix("rule:")
                        instance._rule_patterns.setdefault(rule_id, []).append(parts[1])
                    continue
                instance._global_patterns.append(line)
        return instance

    def is_ignored(self, filepath: str, rule_id: Optional[str] = None) -> bool:
        """Return True if *filepath* should be ignored."""
        for pat in self._global_patterns:
            if fnmatch(filepath, pat):
                return True
        if rule_id:
            for pat in self._rule_patterns.get(rule_id, []):
                if fnmatch(filepath, pat):
                    return True
        return False
