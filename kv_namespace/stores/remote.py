"""Synchronous store facade over an async backend."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, override

from kv_namespace.backends.protocol import Order, Store


if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterator
    from concurrent.futures import Future

    from kv_namespace.backends import AsyncBackend


logger = logging.getLogger(__name__)

_T = TypeVar("_T")

DEFAULT_PAGE_SIZE = 256


class _AsyncLoopBridge:
    """Bridge sync calls to async backend operations on a dedicated loop."""

    def __init__(self) -> None:
        super().__init__()
        self._loop_ready = threading.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread = threading.Thread(target=self._run, name="kv-namespace-remote-store", daemon=True)
        self._thread.start()
        _ = self._loop_ready.wait()

    def _run(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._loop_ready.set()
        loop.run_forever()

    def run(self, coroutine: Coroutine[Any, Any, _T]) -> _T:
        if self._loop is None:
            msg = "remote store async loop not initialized"
            raise RuntimeError(msg)
        future: Future[Any] = asyncio.run_coroutine_threadsafe(coroutine, self._loop)
        return future.result()

    def close(self) -> None:
        if self._loop is None:
            return
        _ = self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)


class RemoteStore(Store):
    """Sync :class:`Store` API over a paged async backend.

    ``range`` asks the backend for ``page_size`` keys at a time, resuming after
    the last key it scanned once the previous page has been consumed.
    """

    def __init__(self, backend: AsyncBackend, *, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__()
        if page_size < 1:
            msg = "page_size must be at least 1"
            raise ValueError(msg)
        self._backend = backend
        self._page_size = page_size
        self._bridge = _AsyncLoopBridge()

    @override
    def get(self, key: bytes) -> bytes | None:
        """Return raw value for key, or None when key does not exist."""
        return self._bridge.run(self._backend.get(key))

    @override
    def set(self, key: bytes, value: bytes) -> None:
        """Store raw value for key."""
        self._bridge.run(self._backend.set(key, value))

    @override
    def remove(self, key: bytes) -> None:
        """Remove key if present."""
        self._bridge.run(self._backend.remove(key))

    @override
    def range(self, start: bytes | None, end: bytes | None, order: Order) -> Iterator[tuple[bytes, bytes]]:
        """Iterate pairs in ``[start, end)`` one backend page at a time."""
        return self._paged_range(start, end, order)

    def _paged_range(self, start: bytes | None, end: bytes | None, order: Order) -> Iterator[tuple[bytes, bytes]]:
        while True:
            page = self._bridge.run(self._backend.range(start, end, order, self._page_size))
            logger.debug("fetched page of %d pairs for range [%r, %r) %s", len(page.items), start, end, order.value)
            yield from page.items
            if page.resume_after is None:
                return
            # resume just past the last key scanned
            if order is Order.ASCENDING:
                start = page.resume_after + b"\x00"
            else:
                end = page.resume_after

    def close(self) -> None:
        """Close backend and bridge resources."""
        self._bridge.run(self._backend.close())
        self._bridge.close()
