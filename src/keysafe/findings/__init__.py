"""Finding models, collection, gating, and redaction."""

from keysafe.findings.aggregator import to_findings
from keysafe.findings.collector import IssueCollector, RuleSink
from keysafe.findings.models import Finding, Issue, ScanResult
from keysafe.findings.redactor import redact

__all__ = [
    "Finding",
    "Issue",
    "IssueCollector",
    "RuleSink",
    "ScanResult",
    "redact",
    "to_findings",
]
