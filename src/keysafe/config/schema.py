"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

Severity = Literal["low", "medium", "high", "critical"]

SEVERITY_ORDER: dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
    "critical": 3,
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class ScanConfig:
    fail_on: Severity = "high"  # fail on findings at or above this level
    max_file_size_kb: int = 512
    extensions: List[str] = field(default_factory=list)  # empty = every supported suffix


@dataclass
class OutputConfig:
    show_summary: bool = True


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class IgnoreConfig:
    paths: List[str] = field(default_factory=list)
    rules: List[str] = field(default_factory=list)


@dataclass
class CIConfig:
    full_redaction: bool = True
    max_findings: Optional[int] = None  # circuit-breaker: stop scanning at N findings


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class KeysafeConfig:
    version: str = "1.0"
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    ci: CIConfig = field(default_factory=CIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
