"""Node descriptors exchanged between the introspector, walker and renderers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Kinds of nodes that can appear in an object diagram."""
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass
class FieldEntry:
    """A single field of an object.

    For primitive fields ``value`` is the rendered string; for reference
    fields it is the child object itself (possibly ``None``).
    """
    name: str
    value: Any
    attributes: str = ""


@dataclass
class ObjectNode:
    """Descriptor of a plain (non-array, non-null) object."""
    value: Any
    class_name: str
    primitive_fields: list[FieldEntry] = field(default_factory=list)
    reference_fields: list[FieldEntry] = field(default_factory=list)

    kind = NodeKind.OBJECT

    @property
    def primitive_fields_num(self) -> int:
        return len(self.primitive_fields)


@dataclass
class ArrayNode:
    """Descriptor of an array-like container.

    When ``values_primitive`` is set, ``elements`` holds rendered strings,
    otherwise the element objects themselves.
    """
    value: Any
    class_name: str
    values_primitive: bool
    elements: list[Any] = field(default_factory=list)

    kind = NodeKind.ARRAY


@dataclass(frozen=True)
class NullNode:
    """Descriptor of the shared null pseudo-node."""
    value: Any = None
    class_name: str = "null"

    kind = NodeKind.NULL


NULL_NODE = NullNode()
