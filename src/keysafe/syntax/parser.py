"""Tree-sitter front-end — maps files to grammars and parses source text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from keysafe.errors import KeysafeError

logger = logging.getLogger(__name__)


class ParseError(KeysafeError):
    """Raised when no grammar is available for the requested language."""


_GRAMMARS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_EXTENSION_LANGUAGE: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

SUPPORTED_EXTENSIONS = frozenset(_EXTENSION_LANGUAGE)

_parsers: Dict[str, Parser] = {}


def language_for(path: str | Path) -> Optional[str]:
    """Return the grammar name for *path*, or None if the suffix is unknown."""
    return _EXTENSION_LANGUAGE.get(Path(path).suffix.lower())


def get_parser(language: str) -> Parser:
    """Return a cached parser for *language*."""
    parser = _parsers.get(language)
    if parser is None:
        factory = _GRAMMARS.get(language)
        if factory is None:
            raise ParseError(f"Unsupported language: {language}")
        parser = Parser(Language(factory()))
        _parsers[language] = parser
        logger.debug("Loaded %s grammar", language)
    return parser


def parse_source(source: bytes, language: str) -> Tree:
    """Parse *source* with the grammar for *language*.

    Tree-sitter recovers from syntax errors, so a malformed file still
    yields a tree; the broken regions show up as ERROR nodes.
    """
    tree = get_parser(language).parse(source)
    if tree.root_node.has_error:
        logger.debug("Syntax errors recovered while parsing %s source", language)
    return tree
