"""Namespace handle bundling a prefix with store access helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, override

from kv_namespace.backends.protocol import Order
from kv_namespace.key_encoding import concat, encode_nested_prefix
from kv_namespace.ranges import range_within_namespace, range_within_namespace_typed


if TYPE_CHECKING:
    from collections.abc import Callable

    from kv_namespace.backends import Store
    from kv_namespace.ranges import RangeCursor, TypedRangeCursor


def _segment_bytes(segment: str | bytes) -> bytes:
    if isinstance(segment, str):
        return segment.encode()
    if isinstance(segment, (bytes, bytearray, memoryview)):
        return bytes(segment)
    msg = f"namespace segments must be str or bytes, got {type(segment).__name__}"
    raise TypeError(msg)


class Namespace:
    """A logical sub-collection of keys identified by one or more segments.

    String segments are UTF-8 encoded. Keys passed to the helpers are
    relative to the namespace; the prefix is added and stripped here.
    """

    def __init__(self, *segments: str | bytes) -> None:
        super().__init__()
        if not segments:
            msg = "at least one namespace segment is required"
            raise ValueError(msg)
        self.segments = tuple(_segment_bytes(segment) for segment in segments)
        self.prefix = encode_nested_prefix(self.segments)

    def child(self, *segments: str | bytes) -> Namespace:
        """Return the namespace nested under this one by ``segments``."""
        return Namespace(*self.segments, *segments)

    def key(self, key: bytes) -> bytes:
        """Return the full store key for a relative ``key``."""
        return concat(self.prefix, key)

    def get(self, store: Store, key: bytes) -> bytes | None:
        return store.get(self.key(key))

    def set(self, store: Store, key: bytes, value: bytes) -> None:
        store.set(self.key(key), value)

    def remove(self, store: Store, key: bytes) -> None:
        store.remove(self.key(key))

    def range(
        self,
        store: Store,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
    ) -> RangeCursor:
        """Scan this namespace; see :func:`kv_namespace.ranges.range_within_namespace`."""
        return range_within_namespace(store, self.prefix, start, end, order)

    def range_typed(
        self,
        store: Store,
        start: bytes | None = None,
        end: bytes | None = None,
        order: Order = Order.ASCENDING,
        *,
        type: Any = Any,  # noqa: A002
        decoder: Callable[[bytes], Any] | None = None,
    ) -> TypedRangeCursor[Any]:
        """Scan this namespace decoding values; see :func:`kv_namespace.ranges.range_within_namespace_typed`."""
        return range_within_namespace_typed(store, self.prefix, start, end, order, type=type, decoder=decoder)

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.segments == other.segments

    @override
    def __hash__(self) -> int:
        return hash(self.segments)

    @override
    def __repr__(self) -> str:
        return f"Namespace({', '.join(repr(segment) for segment in self.segments)})"
