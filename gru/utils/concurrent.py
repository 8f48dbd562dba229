"""Thread-safe map and slice containers."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import Any


class ConcurrentMap:
    """A string-keyed mapping safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._items: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store a value under the given key."""
        with self._lock:
            self._items[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value for the key, or the default if absent."""
        with self._lock:
            return self._items.get(key, default)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def items(self) -> list[tuple[str, Any]]:
        """Return a snapshot of the key/value pairs."""
        with self._lock:
            return list(self._items.items())

    def __iter__(self) -> Iterator[str]:
        return iter([key for key, _ in self.items()])

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class ConcurrentSlice:
    """An append-only sequence safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._items: list[Any] = []

    def append(self, item: Any) -> None:
        """Add an item to the end of the slice."""
        with self._lock:
            self._items.append(item)

    def items(self) -> list[tuple[int, Any]]:
        """Return a snapshot of the index/value pairs."""
        with self._lock:
            return list(enumerate(self._items))

    def __iter__(self) -> Iterator[Any]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)