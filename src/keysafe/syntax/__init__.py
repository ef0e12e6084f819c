"""Syntax layer — tree-sitter parsing, node kinds, visitor."""

from keysafe.syntax.nodes import Kind, Location, binding_parts, kind_of, location_of, text_of
from keysafe.syntax.parser import SUPPORTED_EXTENSIONS, ParseError, language_for, parse_source
from keysafe.syntax.visitor import TreeVisitor

__all__ = [
    "Kind",
    "Location",
    "ParseError",
    "SUPPORTED_EXTENSIONS",
    "TreeVisitor",
    "binding_parts",
    "kind_of",
    "language_for",
    "location_of",
    "parse_source",
    "text_of",
]
