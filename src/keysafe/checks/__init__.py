"""Checks — per-kind node handlers that turn rules into issues."""

from keysafe.checks.base import Check, IssueSink
from keysafe.checks.normalizer import normalize
from keysafe.checks.private_keys import CandidatePair, PrivateKeysCheck, contains_marker

__all__ = [
    "CandidatePair",
    "Check",
    "IssueSink",
    "PrivateKeysCheck",
    "contains_marker",
    "normalize",
]
