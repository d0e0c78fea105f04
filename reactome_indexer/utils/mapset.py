"""Multi-valued mapping keeping a sorted, de-duplicated set per key."""
from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, List, Set, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MapSet(Generic[K, V]):
    """Group values under keys, ignoring repeats.

    Elements are returned in sorted order, so values must be mutually comparable.
    """

    def __init__(self) -> None:
        self._map: Dict[K, Set[V]] = {}

    def add(self, key: K, value: V) -> None:
        self._map.setdefault(key, set()).add(value)

    def add_all(self, key: K, values: Iterable[V]) -> None:
        self._map.setdefault(key, set()).update(values)

    def elements(self, key: K) -> List[V]:
        return sorted(self._map.get(key, ()))  # type: ignore[type-var]

    def keys(self) -> List[K]:
        return list(self._map)

    def remove(self, key: K) -> Set[V]:
        return self._map.pop(key, set())

    def values(self) -> List[V]:
        merged: Set[V] = set()
        for values in self._map.values():
            merged.update(values)
        return sorted(merged)  # type: ignore[type-var]

    def clear(self) -> None:
        self._map.clear()
