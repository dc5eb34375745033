"""Least-recently-used cache."""

from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Bounded mapping that drops the least recently used entry first."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._items: OrderedDict[K, V] = OrderedDict()

    def get(self, key: K) -> V:
        """Return the value for ``key`` and mark it as most recently used."""
        try:
            self._items.move_to_end(key)
        except KeyError:
            raise KeyError(key) from None
        return self._items[key]

    def put(self, key: K, value: V, on_evict: Optional[Callable[[K, V], None]] = None) -> None:
        """Store ``value``; ``on_evict`` sees every replaced or dropped entry."""
        if key in self._items:
            old = self._items.pop(key)
            if on_evict is not None:
                on_evict(key, old)

        self._items[key] = value

        while len(self._items) > self.capacity:
            old_key, old_value = self._items.popitem(last=False)
            if on_evict is not None:
                on_evict(old_key, old_value)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)