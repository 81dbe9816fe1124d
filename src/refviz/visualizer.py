"""High-level entry point for drawing object graphs."""

import logging
from typing import Any

from .config import Direction, RefvizConfig
from .graph.graphviz import GraphvizRenderer, RenderCache
from .graph.walker import GraphWalker
from .introspection import IntrospectionPolicy, Introspector
from .styling import (
    ArrayElementAttributesProvider,
    ChangingArrayElementHighlighter,
    NewObjectHighlighter,
    ObjectAttributesProvider,
    StylingPolicy,
)

logger = logging.getLogger(__name__)


class Visualizer:
    """Draws live object graphs as Graphviz DOT text.

    Options are set through chainable methods::

        dot = (Visualizer()
               .treat_as_primitive(str)
               .add_field_attribute("next", "color=red")
               .draw_graph(linked_list))

    Every call to :meth:`draw_graph` is an independent build with fresh node
    discovery. Highlighters, when enabled, compare each build with the one
    before it.
    """

    def __init__(self) -> None:
        self.direction = Direction.TB
        self.show_field_names_in_labels = True
        self.policy = IntrospectionPolicy()
        self.styling = StylingPolicy()
        self.roots: list[Any] = []
        self._new_object_highlighter: NewObjectHighlighter | None = None
        self._array_element_highlighter: ChangingArrayElementHighlighter | None = None

    @classmethod
    def from_config(cls, config: RefvizConfig) -> "Visualizer":
        """Create a visualizer configured from a :class:`RefvizConfig`."""
        draw = config.draw
        styling = config.styling

        visualizer = (
            cls()
            .set_direction(draw.direction)
            .set_show_field_names_in_labels(draw.show_field_names_in_labels)
            .set_ignore_private_fields(draw.ignore_private_fields)
            .set_ignore_null_valued_fields(draw.ignore_null_valued_fields)
            .treat_as_primitive(*draw.treat_as_primitive)
        )
        for name in draw.ignore_fields:
            visualizer.add_ignore_field(name)
        for name, attributes in styling.field_attributes.items():
            visualizer.add_field_attribute(name, attributes)
        for class_name, attributes in styling.class_attributes.items():
            visualizer.add_class_attribute(class_name, attributes)
        if styling.highlight_new_objects:
            visualizer.highlight_new_objects()
        if styling.highlight_changing_array_elements:
            visualizer.highlight_changing_array_elements()
        return visualizer

    def set_direction(self, direction: Direction | str) -> "Visualizer":
        self.direction = Direction(direction)
        return self

    def set_show_field_names_in_labels(self, show: bool) -> "Visualizer":
        self.show_field_names_in_labels = show
        return self

    def set_ignore_private_fields(self, ignore: bool) -> "Visualizer":
        """Skip attributes whose name starts with an underscore."""
        self.policy.ignore_private_fields = ignore
        return self

    def set_ignore_null_valued_fields(self, ignore: bool) -> "Visualizer":
        self.policy.ignore_null_valued_fields = ignore
        return self

    def treat_as_primitive(self, *classes: type | str) -> "Visualizer":
        """Render values of ``classes`` inline instead of as separate nodes.

        Strings name a class (``"decimal.Decimal"``) or a whole module.
        """
        self.policy.treat_as_primitive.extend(classes)
        return self

    def add_ignore_field(self, field_name: str) -> "Visualizer":
        self.policy.ignore_fields.add(field_name)
        return self

    def add_field_attribute(self, field_name: str, attributes: str) -> "Visualizer":
        """Attach Graphviz edge attributes to every edge named ``field_name``."""
        self.styling.field_attributes[field_name] = attributes
        return self

    def add_class_attribute(self, cls: type | str, attributes: str) -> "Visualizer":
        """Attach Graphviz node attributes to every instance of ``cls``."""
        self.styling.class_attributes.add(cls, attributes)
        return self

    def add_object_attributes_provider(self, provider: ObjectAttributesProvider) -> "Visualizer":
        self.styling.add_object_provider(provider)
        return self

    def add_array_element_attributes_provider(self, provider: ArrayElementAttributesProvider) -> "Visualizer":
        self.styling.add_element_provider(provider)
        return self

    def highlight_new_objects(self) -> "Visualizer":
        """Mark objects that did not appear in the previous drawing."""
        if self._new_object_highlighter is None:
            self._new_object_highlighter = NewObjectHighlighter()
            self.styling.add_object_provider(self._new_object_highlighter)
        return self

    def highlight_changing_array_elements(self) -> "Visualizer":
        """Mark array cells whose content changed since the previous drawing."""
        if self._array_element_highlighter is None:
            self._array_element_highlighter = ChangingArrayElementHighlighter()
            self.styling.add_element_provider(self._array_element_highlighter)
        return self

    def add_root(self, obj: Any) -> "Visualizer":
        self.roots.append(obj)
        return self

    def draw_graph(self, *roots: Any, cache: RenderCache | None = None) -> str:
        """Draw ``roots``, or the roots added with :meth:`add_root` if none given.

        Args:
            roots: Objects to start from; ``None`` draws the null node
            cache: Node names to reuse from earlier builds; a fresh cache is
                   used when omitted

        Returns:
            The diagram as DOT text

        Raises:
            IntrospectionError: If a field of a reachable object cannot be read
        """
        if not roots:
            roots = tuple(self.roots)

        renderer = GraphvizRenderer(
            styling=self.styling,
            direction=self.direction,
            show_field_names_in_labels=self.show_field_names_in_labels,
            cache=cache,
        )
        walker = GraphWalker(Introspector(self.policy), renderer, self.styling.get_field_attributes)

        self.styling.begin_build()
        renderer.diagram_begin()
        walker.traverse(roots)
        text = renderer.diagram_end()
        self.styling.end_build()

        logger.info(f"Drew {len(walker.visited)} objects from {len(roots)} roots as {renderer.format_name}")
        return text
