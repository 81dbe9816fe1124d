"""Visitor contract between the graph walker and diagram renderers."""

from abc import ABC, abstractmethod
from typing import Any

from .models import ArrayNode, FieldEntry, ObjectNode


class Visitor(ABC):
    """Callbacks invoked by :class:`~refviz.graph.walker.GraphWalker`.

    A build always starts with :meth:`diagram_begin` and ends with
    :meth:`diagram_end`. Node bodies are reported as begin/element/end
    sequences and are closed before any edge leaving the node is reported.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def diagram_begin(self) -> None:
        """Start a new diagram, discarding any previous output."""
        pass

    @abstractmethod
    def diagram_end(self) -> str:
        """Finish the diagram and return its text."""
        pass

    @abstractmethod
    def visit_null(self) -> None:
        """Report a ``None`` reference; may be called more than once."""
        pass

    @abstractmethod
    def visit_array_begin(self, array_node: ArrayNode) -> None:
        pass

    @abstractmethod
    def visit_array_element(self, array_node: ArrayNode, element: str, element_index: int) -> None:
        pass

    @abstractmethod
    def visit_array_end(self, array: Any) -> None:
        pass

    @abstractmethod
    def visit_array_element_edge(self, array: Any, element_index: int, obj: Any) -> None:
        """Connect element ``element_index`` of ``array`` with ``obj``."""
        pass

    @abstractmethod
    def visit_object_begin(self, object_node: ObjectNode) -> None:
        pass

    @abstractmethod
    def visit_object_primitive_field(self, field_name: str, field_value: str) -> None:
        pass

    @abstractmethod
    def visit_object_end(self, obj: Any) -> None:
        pass

    @abstractmethod
    def visit_object_field_edge(self, obj: Any, field: FieldEntry) -> None:
        """Connect ``obj`` with the child held by ``field``."""
        pass
