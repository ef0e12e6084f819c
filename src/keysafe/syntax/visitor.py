"""Depth-first tree visitor with per-kind callback registration."""

from __future__ import annotations

from typing import Callable, Dict, List

from tree_sitter import Node

from keysafe.syntax.nodes import Kind, kind_of

NodeCallback = Callable[[Node], None]


class TreeVisitor:
    """Walks a syntax tree and dispatches each node to subscribed callbacks.

    Nodes are visited in pre-order: a node's callbacks run before any of its
    descendants are visited. The walk is iterative so deeply nested sources
    cannot exhaust the interpreter stack.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[Kind, List[NodeCallback]] = {}

    def subscribe(self, kind: Kind, callback: NodeCallback) -> None:
        self._callbacks.setdefault(kind, []).append(callback)

    @property
    def subscribed_kinds(self) -> List[Kind]:
        return list(self._callbacks)

    def visit(self, root: Node) -> int:
        """Visit every node under *root*. Returns the number of nodes seen."""
        seen = 0
        stack = [root]
        while stack:
            node = stack.pop()
            seen += 1
            callbacks = self._callbacks.get(kind_of(node))
            if callbacks:
                for callback in callbacks:
                    callback(node)
            stack.extend(reversed(node.children))
        return seen
