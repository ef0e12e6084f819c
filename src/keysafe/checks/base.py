"""Check base class and the issue sink protocol."""

from __future__ import annotations

from typing import Callable, Dict, Protocol

from tree_sitter import Node, Tree

from keysafe.rules.models import Rule
from keysafe.syntax.nodes import Kind
from keysafe.syntax.visitor import TreeVisitor


class IssueSink(Protocol):
    """Receives issues one at a time, in the order they are raised."""

    def add_issue(self, node: Node, message: str) -> None:
        ...


Handler = Callable[[Node, IssueSink], None]


class Check:
    """A rule implementation made of per-kind node handlers.

    Subclasses fill in :meth:`handlers`. A check keeps no state between
    nodes or files; everything it needs arrives as arguments.
    """

    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def handlers(self) -> Dict[Kind, Handler]:
        raise NotImplementedError

    def subscribe(self, visitor: TreeVisitor, sink: IssueSink) -> None:
        """Register this check's handlers on *visitor*, reporting into *sink*."""
        for kind, handler in self.handlers().items():
            visitor.subscribe(kind, _bind(handler, sink))

    def scan(self, tree: Tree, sink: IssueSink) -> None:
        """Run this check alone over a whole tree."""
        visitor = TreeVisitor()
        self.subscribe(visitor, sink)
        visitor.visit(tree.root_node)


def _bind(handler: Handler, sink: IssueSink) -> Callable[[Node], None]:
    def callback(node: Node) -> None:
        handler(node, sink)

    return callback
