"""Canonical forms of candidate names and values."""

from __future__ import annotations

_QUOTES = ("'", '"', "`")


def strip_quotes(text: str) -> str:
    """Remove one matching pair of surrounding quote characters, if present."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        return text[1:-1]
    return text


def normalize(raw: str, is_name: bool = False) -> str:
    """Strip surrounding quotes and whitespace; names are also lower-cased.

    Values keep their case, since marker matching is case-sensitive.
    """
    text = strip_quotes(raw.strip()).strip()
    if is_name:
        text = text.lower()
    return text
