"""Range scans that decode stored values into typed objects."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, override

import msgspec

from kv_namespace.backends.protocol import Order
from kv_namespace.errors import DecodeError
from kv_namespace.key_encoding import trim

from .prefixed import RangeCursor, open_scan


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from kv_namespace.backends import Store


logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def json_decoder(type: Any = Any) -> Callable[[bytes], Any]:  # noqa: A002
    """Return a ``msgspec`` JSON decoder validating against ``type``."""
    return msgspec.json.Decoder(type).decode


def deserialize_kv(item: tuple[bytes, bytes], decoder: Callable[[bytes], _T]) -> tuple[bytes, _T]:
    """Decode the value of one ``(key, raw_value)`` pair."""
    key, raw_value = item
    return key, decoder(raw_value)


class TypedRangeCursor(RangeCursor, Generic[_T]):
    """Cursor yielding ``(relative_key, decoded_value)`` pairs.

    A value that fails to decode raises :class:`DecodeError` from that one
    ``next()`` call. The cursor stays open, so the caller may keep pulling
    the items after it.
    """

    def __init__(self, prefix: bytes, scan: Iterator[tuple[bytes, bytes]], decoder: Callable[[bytes], _T]) -> None:
        super().__init__(prefix, scan)
        self._decoder = decoder

    @override
    def __next__(self) -> tuple[bytes, _T]:  # type: ignore[override]
        raw_key, raw_value = self._next_raw()
        key = trim(self.prefix, raw_key)
        try:
            return deserialize_kv((key, raw_value), self._decoder)
        except Exception as error:
            logger.warning("undecodable value under namespace %s at key %r: %s", self.prefix.hex(), key, error)
            raise DecodeError(key, raw_key, str(error)) from error

    def results(self) -> Iterator[tuple[bytes, _T | DecodeError]]:
        """Yield every item, putting a :class:`DecodeError` in place of values that fail to decode.

        The cursor is closed when the generator finishes or is closed early.
        """
        try:
            while True:
                try:
                    yield next(self)
                except StopIteration:
                    return
                except DecodeError as error:
                    yield error.key, error
        finally:
            self.close()


def range_within_namespace_typed(
    store: Store,
    namespace: bytes,
    start: bytes | None = None,
    end: bytes | None = None,
    order: Order = Order.ASCENDING,
    *,
    type: Any = Any,  # noqa: A002
    decoder: Callable[[bytes], _T] | None = None,
) -> TypedRangeCursor[_T]:
    """Scan ``namespace`` like :func:`range_within_namespace`, decoding each value.

    Values are JSON-decoded into ``type`` with ``msgspec`` unless a custom
    ``decoder`` is given.
    """
    value_decoder = decoder if decoder is not None else json_decoder(type)
    return TypedRangeCursor(namespace, open_scan(store, namespace, start, end, order), value_decoder)
