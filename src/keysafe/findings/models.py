"""Finding data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Issue:
    """A single issue raised by a check (before severity gating)."""

    rule_id: str
    rule_name: str
    severity: str
    file: str
    line_no: int
    column: int
    end_line: int
    end_column: int
    message: str
    snippet: str  # source text of the flagged node; contains the secret


@dataclass
class Finding:
    """Severity-gated finding for output."""

    id: str  # e.g. FINDING-001
    rule_id: str
    rule_name: str
    severity: str
    file: str
    line_no: int
    column: int
    message: str
    snippet: str
    is_blocking: bool = True  # does this finding cause exit code 1?


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    findings: List[Finding] = field(default_factory=list)
    suppressed: List["Suppression"] = field(default_factory=list)  # type: ignore[name-defined]
    skipped_files: List[str] = field(default_factory=list)
    scanned_files: int = 0
    blocked: bool = False
    truncated: bool = False  # max_findings circuit-breaker tripped
    scan_duration_ms: float = 0.0

    @property
    def total_findings(self) -> int:
        return len(self.findings)

    @property
    def blocking_findings(self) -> List[Finding]:
        return [f for f in self.findings if f.is_blocking]

    @property
    def informational_findings(self) -> List[Finding]:
        return [f for f in self.findings if not f.is_blocking]
