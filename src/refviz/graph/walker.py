"""Depth-first traversal of live object graphs."""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from .framework import Visitor
from .identity import IdentityMap
from .models import NULL_NODE, NodeKind

logger = logging.getLogger(__name__)

FieldAttributes = Callable[[str, Any], str]


class VisitedSet:
    """Objects discovered during one traversal, keyed by identity."""

    def __init__(self) -> None:
        self._node_ids: IdentityMap[int] = IdentityMap()
        self.null_visited = False

    def __contains__(self, obj: Any) -> bool:
        if obj is None:
            return self.null_visited
        return obj in self._node_ids

    def __len__(self) -> int:
        return len(self._node_ids)

    def assign(self, obj: Any) -> int:
        """Give ``obj`` the next node id."""
        node_id = len(self._node_ids) + 1
        self._node_ids[obj] = node_id
        return node_id


class GraphWalker:
    """Walks object graphs and reports them to a :class:`Visitor`.

    Each object is described once, when it is first reached; later
    references to it only produce edges. Nodes are expanded from an explicit
    stack of generators so deep chains do not exhaust the interpreter's
    recursion limit, but the event order is that of a recursive depth-first
    walk: a node body is reported before its children, and the edge to a
    child after the child's whole subtree.
    """

    def __init__(self, introspector, visitor: Visitor, field_attributes: FieldAttributes | None = None):
        self.introspector = introspector
        self.visitor = visitor
        self.field_attributes = field_attributes
        self.visited = VisitedSet()

    def traverse(self, roots: Iterable[Any]) -> None:
        """Report every object reachable from ``roots`` to the visitor."""
        self.visited = VisitedSet()
        for root in roots:
            self._visit(root)

        logger.debug(f"Traversal reached {len(self.visited)} objects")

    def _pending(self, obj: Any) -> bool:
        # The null node is reported for every reference to it
        return obj is None or obj not in self.visited

    def _describe(self, obj: Any):
        if obj is None:
            self.visited.null_visited = True
            return NULL_NODE
        self.visited.assign(obj)
        return self.introspector.describe(obj)

    def _visit(self, root: Any) -> None:
        if not self._pending(root):
            return

        stack: list[Iterator[Any]] = [self._expand(root)]
        while stack:
            try:
                child = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            if self._pending(child):
                stack.append(self._expand(child))

    def _expand(self, obj: Any) -> Iterator[Any]:
        """Report ``obj`` and yield each child that has to be visited first.

        The caller fully visits a yielded child before resuming the
        generator, which then reports the edge leading to it.
        """
        node = self._describe(obj)

        if node.kind == NodeKind.NULL:
            self.visitor.visit_null()

        elif node.kind == NodeKind.ARRAY:
            self.visitor.visit_array_begin(node)
            for index, element in enumerate(node.elements):
                self.visitor.visit_array_element(node, element if node.values_primitive else "", index)
            self.visitor.visit_array_end(obj)

            if node.values_primitive:
                return
            for index, element in enumerate(node.elements):
                yield element
                self.visitor.visit_array_element_edge(obj, index, element)

        elif node.kind == NodeKind.OBJECT:
            self.visitor.visit_object_begin(node)
            for entry in node.primitive_fields:
                self.visitor.visit_object_primitive_field(entry.name, entry.value)
            self.visitor.visit_object_end(obj)

            for entry in node.reference_fields:
                yield entry.value
                if self.field_attributes is not None:
                    entry.attributes = self.field_attributes(entry.name, entry.value)
                self.visitor.visit_object_field_edge(obj, entry)

        else:
            raise ValueError(f"Unexpected node kind: {node.kind}")
