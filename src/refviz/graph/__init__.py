"""Object graph traversal and diagram rendering.

The walker discovers objects by identity and reports them through the
visitor contract; the Graphviz renderer turns those callbacks into DOT text.
"""

from .framework import Visitor
from .graphviz import GraphvizRenderer, RenderCache
from .identity import IdentityMap, IdentitySet
from .models import ArrayNode, FieldEntry, NodeKind, NullNode, ObjectNode
from .walker import GraphWalker, VisitedSet

__all__ = [
    "Visitor",
    "GraphWalker",
    "VisitedSet",
    "GraphvizRenderer",
    "RenderCache",
    "IdentityMap",
    "IdentitySet",
    "NodeKind",
    "ObjectNode",
    "ArrayNode",
    "NullNode",
    "FieldEntry",
]
