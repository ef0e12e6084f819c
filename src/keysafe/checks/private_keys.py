"""Hard-coded private key detection.

Every construct that binds a string literal to a name is turned into a
(name, value) pair and the value is searched for PEM private key headers:

========================  ==========================  =====================
construct                 name side                   value side
========================  ==========================  =====================
initialized binding       declared name / pattern     initializer literal
assignment expression     assignment target           right-hand literal
class field declaration   property name               initializer literal
binary expression         identifier operand          literal operand
object pair property      key                         literal value
========================  ==========================  =====================

Only plain string literals qualify. A key built by concatenation, split
across literals, or encoded is not found, and a marker substring is enough
to flag a literal even if the rest of it is not a valid key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from tree_sitter import Node

from keysafe.checks.base import Check, Handler, IssueSink
from keysafe.checks.normalizer import normalize
from keysafe.syntax.nodes import Kind, binding_parts, is_kind, location_of, text_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidatePair:
    """A name bound to a literal value at one syntax node."""

    name: str
    value: str
    site: Node


def extract_bound_literal(node: Node) -> Optional[CandidatePair]:
    """Pair for declarations, assignments, fields and object properties.

    Returns None unless the value side is present and a string literal;
    class fields declared without an initializer land here.
    """
    target, value = binding_parts(node)
    if target is None or not is_kind(value, Kind.STRING_LITERAL):
        return None
    return CandidatePair(text_of(target), text_of(value), node)


def extract_comparison(node: Node) -> CandidatePair:
    """Pair for ``identifier <op> "literal"`` in either operand order.

    Any other operand shape gives an empty pair, which never matches.
    """
    left, right = binding_parts(node)
    if is_kind(left, Kind.IDENTIFIER_REFERENCE) and is_kind(right, Kind.STRING_LITERAL):
        return CandidatePair(text_of(left), text_of(right), node)
    if is_kind(right, Kind.IDENTIFIER_REFERENCE) and is_kind(left, Kind.STRING_LITERAL):
        return CandidatePair(text_of(right), text_of(left), node)
    return CandidatePair("", "", node)


EXTRACTORS: Dict[Kind, Callable[[Node], Optional[CandidatePair]]] = {
    Kind.INITIALIZED_BINDING: extract_bound_literal,
    Kind.ASSIGNMENT_EXPRESSION: extract_bound_literal,
    Kind.FIELD_DECLARATION: extract_bound_literal,
    Kind.BINARY_EXPRESSION: extract_comparison,
    Kind.PAIR_PROPERTY: extract_bound_literal,
}


def contains_marker(value: str, markers: Sequence[str]) -> Optional[str]:
    """Return the first marker found in *value*, or None."""
    for marker in markers:
        if marker in value:
            return marker
    return None


class PrivateKeysCheck(Check):
    """Flags string literals carrying one of the rule's markers.

    Written for the built-in ``PRIVATE_KEYS`` rule, but any marker rule
    loaded from ``.keysafe-rules/`` runs through the same extraction.
    """

    def handlers(self) -> Dict[Kind, Handler]:
        return {kind: self._handler_for(extract) for kind, extract in EXTRACTORS.items()}

    def _handler_for(self, extract: Callable[[Node], Optional[CandidatePair]]) -> Handler:
        def handle(node: Node, sink: IssueSink) -> None:
            pair = extract(node)
            if pair is not None:
                self.validate(pair, sink)

        return handle

    def validate(self, pair: CandidatePair, sink: IssueSink) -> bool:
        """Report *pair* if its value holds a marker. Returns True on a hit."""
        name = normalize(pair.name, is_name=True)
        value = normalize(pair.value)
        if not value:
            return False
        if contains_marker(value, self.rule.markers) is None:
            return False
        logger.debug(
            "%s: literal bound to %r at line %d",
            self.rule.id,
            name,
            location_of(pair.site).line,
        )
        sink.add_issue(pair.site, self.rule.description)
        return True
