"""Scanner — engine and suppression."""

from keysafe.scanner.engine import ScanError, collect_files, scan_paths, scan_source
from keysafe.scanner.suppression import KeysafeIgnore, Suppression, SuppressionChecker

__all__ = [
    "KeysafeIgnore",
    "ScanError",
    "Suppression",
    "SuppressionChecker",
    "collect_files",
    "scan_paths",
    "scan_source",
]
