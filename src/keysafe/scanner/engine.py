"""Core scan engine — orchestrates the full pipeline.

Exception safety: the scan loop wraps all operations so that flagged
secret values never leak into tracebacks or error messages.
"""

from __future__ import annotations

import logging
import os
import time
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from keysafe.checks.private_keys import PrivateKeysCheck
from keysafe.config.schema import KeysafeConfig
from keysafe.errors import KeysafeError
from keysafe.findings.aggregator import to_findings
from keysafe.findings.collector import IssueCollector
from keysafe.findings.models import Issue, ScanResult
from keysafe.rules.models import Rule
from keysafe.rules.registry import RuleRegistry
from keysafe.scanner.suppression import (
    IGNORE_FILENAME,
    KeysafeIgnore,
    Suppression,
    SuppressionChecker,
)
from keysafe.syntax.parser import SUPPORTED_EXTENSIONS, language_for, parse_source
from keysafe.syntax.visitor import TreeVisitor

logger = logging.getLogger(__name__)

# Never descended into when expanding directories.
_SKIP_DIRS = frozenset({".git", ".hg", ".svn", "node_modules", "__pycache__"})


class ScanError(KeysafeError):
    """Raised on internal scanner error (never contains secret values)."""


def scan_source(
    source: bytes,
    language: str,
    rules: Sequence[Rule],
    path: str = "<memory>",
) -> List[Issue]:
    """Parse *source* once and run every rule's check over the tree."""
    tree = parse_source(source, language)
    collector = IssueCollector(path, source)
    visitor = TreeVisitor()
    for rule in rules:
        PrivateKeysCheck(rule).subscribe(visitor, collector.sink_for(rule))
    visitor.visit(tree.root_node)
    return collector.issues


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _walk(target: Path) -> Iterator[Path]:
    if target.is_file():
        yield target
        return
    for dirpath, dirnames, filenames in os.walk(target):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def collect_files(
    paths: Sequence[Path],
    config: KeysafeConfig,
    root: Path,
) -> Tuple[List[Tuple[Path, str]], List[str]]:
    """Expand *paths* into (file, display path) pairs to scan.

    Returns the files to scan and the ``path (reason)`` entries skipped.
    """
    extensions = {e.lower() for e in config.scan.extensions} or set(SUPPORTED_EXTENSIONS)
    ignore_globs = config.ignore.paths
    ignorefile = KeysafeIgnore.from_file(root / IGNORE_FILENAME)
    max_bytes = config.scan.max_file_size_kb * 1024

    selected: List[Tuple[Path, str]] = []
    skipped: List[str] = []
    seen: set[str] = set()

    for target in paths:
        if not target.exists():
            skipped.append(f"{target.as_posix()} (missing)")
            continue
        for path in _walk(target):
            display = _display_path(path, root)
            if display in seen:
                continue
            seen.add(display)
            if path.suffix.lower() not in extensions or language_for(path) is None:
                continue
            if any(fnmatch(display, g) for g in ignore_globs):
                skipped.append(f"{display} (ignored)")
                continue
            if ignorefile.is_ignored(display):
                skipped.append(f"{display} (keysafeignore)")
                continue
            try:
                size = path.stat().st_size
            except OSError:
                skipped.append(f"{display} (unreadable)")
                continue
            if size > max_bytes:
                skipped.append(f"{display} (oversized)")
                continue
            selected.append((path, display))

    return selected, skipped


def scan_paths(
    paths: Sequence[Path],
    config: KeysafeConfig,
    registry: RuleRegistry,
    root: Path,
) -> ScanResult:
    """Execute the full scan pipeline over *paths*. Returns a ScanResult."""
    start = time.perf_counter()

    files, skipped_files = collect_files(paths, config, root)
    ignorefile = KeysafeIgnore.from_file(root / IGNORE_FILENAME)
    rules = registry.enabled_rules()
    max_findings: Optional[int] = config.ci.max_findings

    issues: List[Issue] = []
    suppressions: List[Suppression] = []
    scanned = 0
    truncated = False

    logger.info("Scanning %d file(s) with %d rule(s)", len(files), len(rules))

    try:
        for path, display in files:
            if max_findings is not None and len(issues) >= max_findings:
                truncated = True
                logger.warning("Stopped after %d findings (ci.max_findings)", len(issues))
                break

            try:
                source = path.read_bytes()
            except OSError as exc:
                skipped_files.append(f"{display} (unreadable)")
                logger.warning("Cannot read %s: %s", display, exc.strerror)
                continue

            language = language_for(path)
            assert language is not None
            file_rules = [r for r in rules if not ignorefile.is_ignored(display, r.id)]
            file_issues = scan_source(source, language, file_rules, display)
            scanned += 1
            logger.debug("%s: %d issue(s)", display, len(file_issues))

            if not file_issues:
                continue

            checker = SuppressionChecker()
            checker.register_source(display, source.decode("utf-8", errors="replace"))
            for issue in file_issues:
                sup = checker.suppression_for(
                    display, issue.line_no, issue.end_line, issue.rule_id
                )
                if sup is not None:
                    suppressions.append(sup)
                    continue
                issues.append(issue)

    except KeysafeError:
        raise
    except Exception:
        # Exception safety: do NOT let issue snippets leak into the traceback
        issue_count = len(issues)
        issues.clear()
        raise ScanError(
            f"Internal scanner error after {issue_count} issues. "
            "Secrets have been scrubbed from this error."
        ) from None

    findings = to_findings(issues, config.scan.fail_on)
    blocked = any(f.is_blocking for f in findings)

    elapsed = (time.perf_counter() - start) * 1000

    return ScanResult(
        findings=findings,
        suppressed=suppressions,
        skipped_files=skipped_files,
        scanned_files=scanned,
        blocked=blocked,
        truncated=truncated,
        scan_duration_ms=round(elapsed, 2),
    )
