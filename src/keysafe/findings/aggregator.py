"""Severity gating and numbering of issues."""

from __future__ import annotations

from typing import List

from keysafe.config.schema import severity_at_or_above
from keysafe.findings.models import Finding, Issue


def to_findings(issues: List[Issue], fail_on: str) -> List[Finding]:
    """Number issues and apply the severity gate.

    No deduplication: the same literal flagged at two nodes (say, an
    assignment and a comparison) stays two findings.
    """
    findings: List[Finding] = []
    for counter, issue in enumerate(issues, 1):
        findings.append(
            Finding(
                id=f"FINDING-{counter:03d}",
                rule_id=issue.rule_id,
                rule_name=issue.rule_name,
                severity=issue.severity,
                file=issue.file,
                line_no=issue.line_no,
                column=issue.column,
                message=issue.message,
                snippet=issue.snippet,
                is_blocking=severity_at_or_above(issue.severity, fail_on),
            )
        )
    return findings
