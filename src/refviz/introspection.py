"""Field introspection for live Python objects.

Turns an object into the node descriptor the walker consumes: arrays for
sequence and set containers, objects with primitive and reference fields for
everything else. What counts as primitive, and which fields are dropped, is
decided by an :class:`IntrospectionPolicy`.
"""

import array
import logging
import types
from collections import deque
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import IntrospectionError
from .graph.models import ArrayNode, FieldEntry, ObjectNode

logger = logging.getLogger(__name__)

# Always rendered inline, whatever the policy says
BUILTIN_PRIMITIVES = (bool, int, float, complex)
NAMED_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)
# Immutable scalars shown as a node with a single ``value`` row when not primitive
SCALAR_TYPES = (str, bytes) + BUILTIN_PRIMITIVES
REFERENCE_ARRAY_TYPES = (list, tuple, set, frozenset, deque)
PRIMITIVE_ARRAY_TYPES = (array.array, bytearray)

SKIPPED_SLOTS = ("__dict__", "__weakref__")


def class_matches(cls: type, selector: type | str) -> bool:
    """Check whether ``cls`` is selected by ``selector``.

    ``selector`` is either a class (matched with ``issubclass``) or a string
    naming a class by qualified or plain name, or a module whose classes are
    all selected.
    """
    if isinstance(selector, type):
        return issubclass(cls, selector)

    for klass in cls.__mro__:
        if selector in (f"{klass.__module__}.{klass.__qualname__}", klass.__qualname__):
            return True

    module = cls.__module__ or ""
    return module == selector or module.startswith(selector + ".")


def _mangle(klass: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{klass.__name__.lstrip('_')}{name}"
    return name


@dataclass
class IntrospectionPolicy:
    """Filtering rules applied while reading fields."""
    treat_as_primitive: list[type | str] = field(default_factory=list)
    ignore_fields: set[str] = field(default_factory=set)
    ignore_private_fields: bool = False
    ignore_null_valued_fields: bool = False


class Introspector:
    """Reads fields of live objects under an :class:`IntrospectionPolicy`.

    Field order is deterministic for a given class: ``__slots__`` in
    declaration order, base classes first, then the instance ``__dict__`` in
    insertion order. Mappings expose their entries as fields.
    """

    def __init__(self, policy: IntrospectionPolicy | None = None):
        self.policy = policy or IntrospectionPolicy()
        self._primitive_classes: dict[type, bool] = {}

    def is_primitive_class(self, cls: type) -> bool:
        cached = self._primitive_classes.get(cls)
        if cached is None:
            cached = issubclass(cls, BUILTIN_PRIMITIVES + NAMED_TYPES) or any(
                class_matches(cls, selector) for selector in self.policy.treat_as_primitive
            )
            self._primitive_classes[cls] = cached
        return cached

    def is_primitive(self, value: Any) -> bool:
        return value is not None and self.is_primitive_class(type(value))

    def format_value(self, value: Any) -> str:
        """Render a primitive value as label text."""
        if isinstance(value, NAMED_TYPES):
            return getattr(value, "__qualname__", None) or getattr(value, "__name__", repr(value))
        return str(value)

    def _format(self, owner: Any, name: str, value: Any) -> str:
        try:
            return self.format_value(value)
        except Exception as e:
            raise IntrospectionError(type(owner), name, e) from e

    def describe(self, obj: Any) -> ArrayNode | ObjectNode:
        """Build the node descriptor of a non-null object."""
        cls = type(obj)
        class_name = cls.__name__

        if isinstance(obj, PRIMITIVE_ARRAY_TYPES):
            values = [self._format(obj, f"[{i}]", v) for i, v in enumerate(obj)]
            return ArrayNode(obj, class_name, True, values)

        if isinstance(obj, REFERENCE_ARRAY_TYPES):
            elements = list(obj)
            if all(self.is_primitive(e) for e in elements):
                values = [self._format(obj, f"[{i}]", e) for i, e in enumerate(elements)]
                return ArrayNode(obj, class_name, True, values)
            return ArrayNode(obj, class_name, False, elements)

        node = ObjectNode(obj, class_name)
        if isinstance(obj, SCALAR_TYPES + NAMED_TYPES):
            node.primitive_fields.append(FieldEntry("value", self._format(obj, "value", obj)))
            return node

        if isinstance(obj, Enum):
            fields = iter([("name", obj.name), ("value", obj.value)])
        elif isinstance(obj, Mapping):
            fields = ((str(key), value) for key, value in obj.items())
        else:
            fields = self._attribute_fields(obj)

        self._add_fields(node, fields)
        return node

    def _add_fields(self, node: ObjectNode, fields: Iterator[tuple[str, Any]]) -> None:
        for name, value in fields:
            if name in self.policy.ignore_fields:
                continue
            if value is None:
                if self.policy.ignore_null_valued_fields:
                    continue
                node.reference_fields.append(FieldEntry(name, None))
            elif self.is_primitive(value):
                node.primitive_fields.append(FieldEntry(name, self._format(node.value, name, value)))
            else:
                node.reference_fields.append(FieldEntry(name, value))

    def _attribute_fields(self, obj: Any) -> Iterator[tuple[str, Any]]:
        cls = type(obj)
        seen: set[str] = set()

        for klass in reversed(cls.__mro__):
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            for slot in slots:
                if slot in SKIPPED_SLOTS or slot in seen or self._is_hidden(slot):
                    continue
                seen.add(slot)
                try:
                    value = getattr(obj, _mangle(klass, slot))
                except AttributeError:
                    # Unset slot
                    continue
                except Exception as e:
                    raise IntrospectionError(cls, slot, e) from e
                yield slot, value

        try:
            attributes = vars(obj)
        except TypeError:
            return
        except Exception as e:
            raise IntrospectionError(cls, "__dict__", e) from e

        for name, value in list(attributes.items()):
            if name in seen or self._is_hidden(name):
                continue
            yield name, value

    def _is_hidden(self, name: str) -> bool:
        return self.policy.ignore_private_fields and name.startswith("_")
