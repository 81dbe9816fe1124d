"""Styling policy: Graphviz attributes attached to fields, nodes and cells."""

from typing import Any, Protocol

from .graph.identity import IdentityMap, IdentitySet
from .introspection import BUILTIN_PRIMITIVES, class_matches


class ObjectAttributesProvider(Protocol):
    """Supplies whole-node attributes, e.g. ``color=red``."""

    def get_attribute(self, obj: Any) -> str:
        ...


class ArrayElementAttributesProvider(Protocol):
    """Supplies ``<td>`` attributes for a single array cell."""

    def get_element_attribute(self, array: Any, index: int) -> str:
        ...


class ClassAttributes:
    """Node attributes selected by the class of the object."""

    def __init__(self) -> None:
        self._attributes: list[tuple[type | str, str]] = []

    def add(self, cls: type | str, attributes: str) -> None:
        self._attributes.append((cls, attributes))

    def get_attribute(self, obj: Any) -> str:
        cls = type(obj)
        for selector, attributes in self._attributes:
            if class_matches(cls, selector):
                return attributes
        return ""


class NewObjectHighlighter:
    """Highlights objects that no earlier build has drawn.

    The first build after construction or :meth:`reset` only records the
    baseline. Every object drawn by a completed build stays known for the
    lifetime of the highlighter.
    """

    def __init__(self, attribute: str = "color=red"):
        self.attribute = attribute
        self._known = IdentitySet()
        self._current = IdentitySet()
        self._has_baseline = False

    def begin_build(self) -> None:
        self._current = IdentitySet()

    def end_build(self) -> None:
        for obj in self._current:
            self._known.add(obj)
        self._current = IdentitySet()
        self._has_baseline = True

    def reset(self) -> None:
        self._known = IdentitySet()
        self._current = IdentitySet()
        self._has_baseline = False

    def get_attribute(self, obj: Any) -> str:
        self._current.add(obj)
        if self._has_baseline and obj not in self._known:
            return self.attribute
        return ""


class ChangingArrayElementHighlighter:
    """Highlights array cells whose content changed since the previous build.

    Primitive elements are compared by value, references by identity. Cells
    beyond the previous length count as changed.
    """

    def __init__(self, attribute: str = 'bgcolor="yellow"'):
        self.attribute = attribute
        self._previous: IdentityMap[tuple] = IdentityMap()
        self._current: IdentityMap[tuple] = IdentityMap()

    def begin_build(self) -> None:
        self._current = IdentityMap()

    def end_build(self) -> None:
        self._previous = self._current
        self._current = IdentityMap()

    def reset(self) -> None:
        self._previous = IdentityMap()
        self._current = IdentityMap()

    def get_element_attribute(self, array: Any, index: int) -> str:
        snapshot = self._current.get(array)
        if snapshot is None:
            snapshot = self._current.setdefault(array, tuple(array))

        previous = self._previous.get(array)
        if previous is None:
            return ""
        if index >= len(previous) or self._changed(previous[index], snapshot[index]):
            return self.attribute
        return ""

    @staticmethod
    def _changed(old: Any, new: Any) -> bool:
        if old is new:
            return False
        if type(old) is type(new) and isinstance(old, BUILTIN_PRIMITIVES + (str, bytes)):
            return old != new
        return True


class StylingPolicy:
    """Collects every attribute source consulted by the renderer."""

    def __init__(self) -> None:
        self.field_attributes: dict[str, str] = {}
        self.class_attributes = ClassAttributes()
        self.object_providers: list[ObjectAttributesProvider] = [self.class_attributes]
        self.element_providers: list[ArrayElementAttributesProvider] = []

    def add_object_provider(self, provider: ObjectAttributesProvider) -> None:
        self.object_providers.append(provider)

    def add_element_provider(self, provider: ArrayElementAttributesProvider) -> None:
        self.element_providers.append(provider)

    def get_field_attributes(self, field_name: str, value: Any = None) -> str:
        return self.field_attributes.get(field_name, "")

    def get_object_attributes(self, obj: Any) -> str:
        attributes = (provider.get_attribute(obj) for provider in self.object_providers)
        return ",".join(a for a in attributes if a)

    def get_array_element_attributes(self, array: Any, index: int) -> str:
        attributes = (provider.get_element_attribute(array, index) for provider in self.element_providers)
        return " ".join(a for a in attributes if a)

    def begin_build(self) -> None:
        for provider in self._listeners():
            provider.begin_build()

    def end_build(self) -> None:
        for provider in self._listeners():
            provider.end_build()

    def reset(self) -> None:
        """Forget state kept by highlighters between builds."""
        for provider in self._listeners():
            if hasattr(provider, "reset"):
                provider.reset()

    def _listeners(self) -> list:
        providers = [*self.object_providers, *self.element_providers]
        return [p for p in providers if hasattr(p, "begin_build") and hasattr(p, "end_build")]
