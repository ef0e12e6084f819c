"""Issue sinks that turn flagged syntax nodes into Issue records."""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from keysafe.findings.models import Issue
from keysafe.rules.models import Rule
from keysafe.syntax.nodes import location_of, text_of


def _snippet(node: Node) -> str:
    # Wrapped bindings are folded onto one line so the literal stays visible
    return " ".join(line.strip() for line in text_of(node).splitlines() if line.strip())


class IssueCollector:
    """Append-only store of the issues raised while scanning one file.

    Nodes are converted to plain locations as soon as they arrive, so no
    syntax node outlives the scan of its tree.
    """

    def __init__(self, file: str, source: Optional[bytes] = None) -> None:
        self.file = file
        self.source = source
        self.issues: List[Issue] = []

    def sink_for(self, rule: Rule) -> "RuleSink":
        return RuleSink(self, rule)

    def record(self, rule: Rule, node: Node, message: str) -> None:
        loc = location_of(node, self.source)
        self.issues.append(
            Issue(
                rule_id=rule.id,
                rule_name=rule.name,
                severity=rule.severity,
                file=self.file,
                line_no=loc.line,
                column=loc.column,
                end_line=loc.end_line,
                end_column=loc.end_column,
                message=message,
                snippet=_snippet(node),
            )
        )

    def __len__(self) -> int:
        return len(self.issues)


class RuleSink:
    """The IssueSink a single check reports into."""

    def __init__(self, collector: IssueCollector, rule: Rule) -> None:
        self._collector = collector
        self._rule = rule

    def add_issue(self, node: Node, message: str) -> None:
        self._collector.record(self._rule, node, message)
