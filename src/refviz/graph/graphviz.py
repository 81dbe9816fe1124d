"""Graphviz DOT renderer for object diagrams."""

import html
import logging
from typing import Any

from ..config import Direction
from .framework import Visitor
from .identity import IdentityMap
from .models import ArrayNode, FieldEntry, ObjectNode

logger = logging.getLogger(__name__)

NULL_NAME = "NULL"


def quote_html(value: str) -> str:
    """Escape text for use inside a Graphviz HTML-like label."""
    return html.escape(value)


def quote_dot(value: str) -> str:
    """Escape text for use inside a double-quoted DOT string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


class RenderCache:
    """Node names handed out by a renderer.

    The cache may be shared by successive builds so that an object keeps its
    node name from one diagram to the next. Sharing also carries the
    ``null_drawn`` flag over, so the ``NULL`` node is declared only by the
    first build that reaches it. Call :meth:`reset` to start over.
    """

    def __init__(self) -> None:
        self.names: IdentityMap[str] = IdentityMap()
        self.null_drawn = False

    def name_of(self, obj: Any) -> str:
        """Return the node name of ``obj``, assigning ``nK`` on first use."""
        if obj is None:
            return NULL_NAME
        name = self.names.get(obj)
        if name is None:
            name = self.names.setdefault(obj, f"n{len(self.names) + 1}")
        return name

    def __contains__(self, obj: Any) -> bool:
        if obj is None:
            return self.null_drawn
        return obj in self.names

    def reset(self) -> None:
        self.names.clear()
        self.null_drawn = False


class GraphvizRenderer(Visitor):
    """Builds a DOT document from walker callbacks.

    Objects become plaintext nodes whose label is an HTML-like table: a header
    cell with the class name followed by one row per primitive field. Arrays
    are laid out as a single row of cells; cells of reference arrays carry a
    ``fN`` port that the element edge starts from.
    """

    def __init__(
        self,
        styling=None,
        direction: Direction = Direction.TB,
        show_field_names_in_labels: bool = True,
        cache: RenderCache | None = None,
    ):
        self.styling = styling
        self.direction = Direction(direction)
        self.show_field_names_in_labels = show_field_names_in_labels
        self.cache = cache if cache is not None else RenderCache()
        self._out: list[str] = []

    @property
    def format_name(self) -> str:
        return "dot"

    def already_visualized(self, obj: Any) -> bool:
        return obj in self.cache

    def dot_name(self, obj: Any) -> str:
        return self.cache.name_of(obj)

    def diagram_begin(self) -> None:
        self._out = [
            "digraph Python {\n",
            f'\trankdir="{self.direction.value}";\n',
            "\tnode[shape=plaintext]\n",
        ]

    def diagram_end(self) -> str:
        self._out.append("}\n")
        text = "".join(self._out)
        logger.debug(f"Rendered DOT diagram with {len(self.cache.names)} named nodes")
        return text

    def visit_null(self) -> None:
        if not self.cache.null_drawn:
            self._out.append(f'\t{NULL_NAME}[label="null", shape=plaintext];\n')
            self.cache.null_drawn = True

    def visit_array_begin(self, array_node: ArrayNode) -> None:
        self._out.append(f"\t{self.dot_name(array_node.value)}[label=<\n")
        if array_node.values_primitive:
            self._out.append("\t\t<table border='0' cellborder='1' cellspacing='0'>\n")
        else:
            self._out.append("\t\t<table border='0' cellborder='1' cellspacing='0' cellpadding='9'>\n")
        self._out.append("\t\t\t<tr>\n")
        self._out.append(f"\t\t\t\t<td>{quote_html(array_node.class_name)}</td>\n")

    def visit_array_element(self, array_node: ArrayNode, element: str, element_index: int) -> None:
        cell = "\t\t\t\t<td"
        if not array_node.values_primitive:
            cell += f' port="f{element_index}"'
        attributes = self._array_element_attributes(array_node.value, element_index)
        if attributes:
            cell += f" {attributes}"
        cell += ">"

        # Primitive values are written into the cell, references stay empty
        # and get an edge from the cell's port instead.
        if array_node.values_primitive:
            cell += quote_html(element)

        self._out.append(cell + "</td>\n")

    def visit_array_element_edge(self, array: Any, element_index: int, obj: Any) -> None:
        self._out.append(
            f"\t{self.dot_name(array)}:f{element_index} -> {self.dot_name(obj)}"
            f'[label="{element_index}",fontsize=12];\n'
        )

    def visit_array_end(self, array: Any) -> None:
        self._out.append("\t\t\t</tr>\n\t\t</table>\n\t>];\n")

    def visit_object_begin(self, object_node: ObjectNode) -> None:
        self._out.append(f"\t{self.dot_name(object_node.value)}[label=<\n")
        self._out.append("\t\t<table border='0' cellborder='1' cellspacing='0'>\n")

        # Header row with the class name spans the primitive field rows
        self._out.append("\t\t\t<tr>\n")
        if object_node.primitive_fields_num > 0:
            self._out.append(f"\t\t\t\t<td rowspan='{object_node.primitive_fields_num + 1}'>")
        else:
            self._out.append("\t\t\t\t<td>")
        self._out.append(f"{quote_html(object_node.class_name)}</td>\n\t\t\t</tr>\n")

    def visit_object_primitive_field(self, field_name: str, field_value: str) -> None:
        row = "\t\t\t<tr>\n\t\t\t\t<td>"
        if self.show_field_names_in_labels:
            row += f"{quote_html(field_name)}: "
        row += quote_html(field_value)
        self._out.append(row + "</td>\n\t\t\t</tr>\n")

    def visit_object_field_edge(self, obj: Any, field: FieldEntry) -> None:
        edge = (
            f"\t{self.dot_name(obj)} -> {self.dot_name(field.value)}"
            f'[label="{quote_dot(field.name)}",fontsize=12'
        )
        if field.attributes:
            edge += f",{field.attributes}"
        self._out.append(edge + "];\n")

    def visit_object_end(self, obj: Any) -> None:
        self._out.append("\t\t</table>\n\t>")
        attributes = self.styling.get_object_attributes(obj) if self.styling is not None else ""
        if attributes:
            self._out.append(f",{attributes}")
        self._out.append("];\n")

    def _array_element_attributes(self, array: Any, element_index: int) -> str:
        if self.styling is None:
            return ""
        return self.styling.get_array_element_attributes(array, element_index)
