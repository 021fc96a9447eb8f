"""Range scans scoped to one namespace prefix."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from kv_namespace.backends.protocol import Order
from kv_namespace.key_encoding import concat, is_unbounded, namespace_upper_bound, trim


if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from kv_namespace.backends import Store


logger = logging.getLogger(__name__)


class RangeCursor:
    """Pull-based cursor over ``(relative_key, raw_value)`` pairs.

    The cursor owns the store scan it was built from. The scan is released
    on exhaustion, on a store error, or on :meth:`close`, whichever comes
    first; abandoning a cursor half way through is safe once it is closed,
    and using it as a context manager does that for you.
    """

    def __init__(self, prefix: bytes, scan: Iterator[tuple[bytes, bytes]]) -> None:
        super().__init__()
        self._prefix = prefix
        self._scan = scan
        self._closed = False

    @property
    def prefix(self) -> bytes:
        return self._prefix

    @property
    def closed(self) -> bool:
        return self._closed

    def _next_raw(self) -> tuple[bytes, bytes]:
        if self._closed:
            raise StopIteration
        try:
            return next(self._scan)
        except Exception:
            self.close()
            raise

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> tuple[bytes, bytes]:
        raw_key, value = self._next_raw()
        return trim(self._prefix, raw_key), value

    def close(self) -> None:
        """Release the underlying store scan. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close_scan = getattr(self._scan, "close", None)
        if close_scan is not None:
            close_scan()
        logger.debug("released scan for prefix %s", self._prefix.hex())

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def absolute_bounds(namespace: bytes, start: bytes | None, end: bytes | None) -> tuple[bytes, bytes | None]:
    """Translate relative ``start``/``end`` into store keys under ``namespace``.

    The upper end is ``None`` (unbounded) when ``namespace`` has no finite
    bound, i.e. it is empty or made only of 0xFF bytes.
    """
    raw_start = namespace if start is None else concat(namespace, start)
    if end is not None:
        return raw_start, concat(namespace, end)
    if is_unbounded(namespace):
        return raw_start, None
    return raw_start, namespace_upper_bound(namespace)


def open_scan(
    store: Store,
    namespace: bytes,
    start: bytes | None,
    end: bytes | None,
    order: Order,
) -> Iterator[tuple[bytes, bytes]]:
    """Start the raw store scan backing a namespace range."""
    raw_start, raw_end = absolute_bounds(namespace, start, end)
    logger.debug(
        "range over namespace %s: [%s, %s) %s",
        namespace.hex(),
        raw_start.hex(),
        "end" if raw_end is None else raw_end.hex(),
        order.value,
    )
    return store.range(raw_start, raw_end, order)


def range_within_namespace(
    store: Store,
    namespace: bytes,
    start: bytes | None = None,
    end: bytes | None = None,
    order: Order = Order.ASCENDING,
) -> RangeCursor:
    """Scan the keys stored under ``namespace``.

    ``start`` (inclusive) and ``end`` (exclusive) are relative keys, without
    the namespace prefix. Yields ``(relative_key, raw_value)`` pairs in
    ``order``. Each call starts a fresh store scan.
    """
    return RangeCursor(namespace, open_scan(store, namespace, start, end, order))
