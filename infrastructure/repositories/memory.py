"""In-memory keyed collection shared by the entity repositories.

Single-process only. Entries keep insertion order; every read hands out a
copy so callers never alias stored state. Each primitive runs under a
re-entrant lock, so a read-modify-write on one key stays atomic even when
the store is driven from worker threads.
"""
from __future__ import annotations

from typing import Callable, Dict, Generic, List, Optional, TypeVar
import threading


E = TypeVar("E")


class InMemoryCollection(Generic[E]):
    def __init__(self, copy: Callable[[E], E]) -> None:
        self._items: Dict[str, E] = {}
        self._copy = copy
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[E]:
        with self._lock:
            item = self._items.get(key)
            return self._copy(item) if item is not None else None

    def put(self, key: str, item: E) -> E:
        with self._lock:
            self._items[key] = self._copy(item)
            return self._copy(item)

    def replace_if_present(self, key: str, item: E) -> Optional[E]:
        """Overwrite an existing entry in place; None when the key is absent."""
        with self._lock:
            if key not in self._items:
                return None
            self._items[key] = self._copy(item)
            return self._copy(item)

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, None) is not None

    def values(self) -> List[E]:
        with self._lock:
            return [self._copy(item) for item in self._items.values()]
