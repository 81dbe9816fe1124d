"""Identity-keyed containers.

Python dictionaries compare keys by equality, which would merge two distinct
but equal objects into one node. These containers key on ``id(obj)`` and keep
a strong reference to every key so an id cannot be recycled while the
container is alive.
"""

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

V = TypeVar("V")


class IdentityMap(Generic[V]):
    """Mapping from object identity to a value."""

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, V]] = {}

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return (obj for obj, _ in self._entries.values())

    def get(self, obj: Any, default: V | None = None) -> V | None:
        entry = self._entries.get(id(obj))
        return default if entry is None else entry[1]

    def __getitem__(self, obj: Any) -> V:
        return self._entries[id(obj)][1]

    def __setitem__(self, obj: Any, value: V) -> None:
        self._entries[id(obj)] = (obj, value)

    def setdefault(self, obj: Any, value: V) -> V:
        entry = self._entries.setdefault(id(obj), (obj, value))
        return entry[1]

    def items(self) -> Iterator[tuple[Any, V]]:
        return iter(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()


class IdentitySet:
    """Set of objects compared by identity."""

    def __init__(self, objects=()) -> None:
        self._objects: dict[int, Any] = {}
        for obj in objects:
            self.add(obj)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._objects.values())

    def add(self, obj: Any) -> bool:
        """Add ``obj``; return True if it was not present yet."""
        key = id(obj)
        if key in self._objects:
            return False
        self._objects[key] = obj
        return True

    def clear(self) -> None:
        self._objects.clear()
