"""Store interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterator


class Order(Enum):
    """Scan direction over byte-lexicographically ordered keys."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class Page:
    """One bounded slice of a backend range scan.

    ``resume_after`` is the last key the backend scanned, set only when the
    scan stopped at its limit. A backend may scan keys it does not return
    (an index entry whose value is gone), so ``items`` can be shorter than
    the limit while more keys remain.
    """

    items: list[tuple[bytes, bytes]] = field(default_factory=list)
    resume_after: bytes | None = None


class Store(ABC):
    """Synchronous ordered byte key-value store.

    Keys sort as unsigned byte strings. ``range`` covers the half-open
    interval ``[start, end)``; a ``None`` bound is unbounded on that side.
    """

    @abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Return raw value for key, or None when key does not exist."""

    @abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        """Store raw value for key."""

    @abstractmethod
    def remove(self, key: bytes) -> None:
        """Remove key if present."""

    @abstractmethod
    def range(self, start: bytes | None, end: bytes | None, order: Order) -> Iterator[tuple[bytes, bytes]]:
        """Iterate ``(key, value)`` pairs with ``start <= key < end`` in ``order``."""


class AsyncBackend(ABC):
    """Async ordered byte key-value backend interface.

    Networked backends return one bounded page per ``range`` call;
    :class:`kv_namespace.stores.RemoteStore` stitches pages into a lazy scan.
    """

    @abstractmethod
    async def get(self, key: bytes) -> bytes | None:
        """Return raw value for key, or None when key does not exist."""

    @abstractmethod
    async def set(self, key: bytes, value: bytes) -> None:
        """Store raw value for key."""

    @abstractmethod
    async def remove(self, key: bytes) -> None:
        """Remove key if present."""

    @abstractmethod
    async def range(
        self,
        start: bytes | None,
        end: bytes | None,
        order: Order,
        limit: int | None = None,
    ) -> Page:
        """Scan at most ``limit`` keys with ``start <= key < end`` in ``order``."""

    @abstractmethod
    async def close(self) -> None:
        """Close any backend resources."""
