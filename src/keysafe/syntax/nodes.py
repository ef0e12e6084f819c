"""Node kinds and accessors over tree-sitter syntax nodes.

Tree-sitter exposes a grammar-specific ``type`` string on every node. The
checks only care about a handful of binding-shaped constructs, so those are
folded into the closed :class:`Kind` enumeration here and everything else
maps to ``Kind.OTHER``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from tree_sitter import Node


class Kind(str, Enum):
    INITIALIZED_BINDING = "initialized_binding"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    FIELD_DECLARATION = "field_declaration"
    BINARY_EXPRESSION = "binary_expression"
    PAIR_PROPERTY = "pair_property"
    STRING_LITERAL = "string_literal"
    IDENTIFIER_REFERENCE = "identifier_reference"
    OTHER = "other"


# grammar type -> (kind, name-side field, value-side field)
_BINDING_FIELDS: Dict[str, Tuple[Kind, str, str]] = {
    "variable_declarator": (Kind.INITIALIZED_BINDING, "name", "value"),
    "assignment_pattern": (Kind.INITIALIZED_BINDING, "left", "right"),
    "object_assignment_pattern": (Kind.INITIALIZED_BINDING, "left", "right"),
    "required_parameter": (Kind.INITIALIZED_BINDING, "pattern", "value"),
    "optional_parameter": (Kind.INITIALIZED_BINDING, "pattern", "value"),
    "assignment_expression": (Kind.ASSIGNMENT_EXPRESSION, "left", "right"),
    "augmented_assignment_expression": (Kind.ASSIGNMENT_EXPRESSION, "left", "right"),
    "field_definition": (Kind.FIELD_DECLARATION, "property", "value"),
    "public_field_definition": (Kind.FIELD_DECLARATION, "name", "value"),
    "binary_expression": (Kind.BINARY_EXPRESSION, "left", "right"),
    "pair": (Kind.PAIR_PROPERTY, "key", "value"),
}


def _is_plain_template(node: Node) -> bool:
    """A template literal without ``${...}`` is as constant as a quoted string."""
    return not any(child.type == "template_substitution" for child in node.children)


def kind_of(node: Node) -> Kind:
    """Classify *node* into one of the closed set of kinds."""
    entry = _BINDING_FIELDS.get(node.type)
    if entry is not None:
        return entry[0]
    if node.type == "string":
        return Kind.STRING_LITERAL
    if node.type == "template_string" and _is_plain_template(node):
        return Kind.STRING_LITERAL
    if node.type == "identifier":
        return Kind.IDENTIFIER_REFERENCE
    return Kind.OTHER


def is_kind(node: Optional[Node], kind: Kind) -> bool:
    """True if *node* is present and of *kind*."""
    return node is not None and kind_of(node) is kind


def binding_parts(node: Node) -> Tuple[Optional[Node], Optional[Node]]:
    """Return the (name side, value side) children of a binding-shaped node.

    Either side is ``None`` when the grammar allows it to be missing, e.g. a
    class field declared without an initializer.
    """
    entry = _BINDING_FIELDS.get(node.type)
    if entry is None:
        return None, None
    _, name_field, value_field = entry
    return node.child_by_field_name(name_field), node.child_by_field_name(value_field)


def text_of(node: Node) -> str:
    """Textual form of *node* exactly as written in the source."""
    raw = node.text
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Location:
    """1-based source range of a node.

    Columns count characters when the source bytes are known and fall back
    to tree-sitter's byte offsets otherwise.
    """

    line: int
    column: int
    end_line: int
    end_column: int


def _char_column(source: bytes, byte_offset: int) -> int:
    line_start = source.rfind(b"\n", 0, byte_offset) + 1
    return len(source[line_start:byte_offset].decode("utf-8", errors="replace")) + 1


def location_of(node: Node, source: Optional[bytes] = None) -> Location:
    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    if source is not None:
        column = _char_column(source, node.start_byte)
        end_column = _char_column(source, node.end_byte)
    else:
        column, end_column = start_col + 1, end_col + 1
    return Location(
        line=start_row + 1,
        column=column,
        end_line=end_row + 1,
        end_column=end_column,
    )
