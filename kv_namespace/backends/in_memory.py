"""In-memory store implementation."""

from __future__ import annotations

from bisect import bisect_left, insort
from typing import TYPE_CHECKING, override

from .protocol import Order, Store


if TYPE_CHECKING:
    from collections.abc import Iterator


class InMemoryStore(Store):
    """Sorted in-memory store for local development and tests."""

    def __init__(self) -> None:
        super().__init__()
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    @override
    def get(self, key: bytes) -> bytes | None:
        """Return raw value for key, or None when key does not exist."""
        return self._data.get(key)

    @override
    def set(self, key: bytes, value: bytes) -> None:
        """Store raw value for key."""
        if key not in self._data:
            insort(self._keys, key)
        self._data[key] = value

    @override
    def remove(self, key: bytes) -> None:
        """Remove key if present."""
        if self._data.pop(key, None) is None:
            return
        del self._keys[bisect_left(self._keys, key)]

    @override
    def range(self, start: bytes | None, end: bytes | None, order: Order) -> Iterator[tuple[bytes, bytes]]:
        """Iterate pairs in ``[start, end)``.

        The key window is captured when the scan starts; keys removed while
        iterating are skipped, keys added while iterating are not visited.
        """
        low = 0 if start is None else bisect_left(self._keys, start)
        high = len(self._keys) if end is None else bisect_left(self._keys, end)
        window = self._keys[low:high]
        if order is Order.DESCENDING:
            window.reverse()
        return self._iter_window(window)

    def _iter_window(self, window: list[bytes]) -> Iterator[tuple[bytes, bytes]]:
        for key in window:
            value = self._data.get(key)
            if value is not None:
                yield key, value

    def __len__(self) -> int:
        return len(self._keys)
