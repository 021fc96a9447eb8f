"""Exceptions raised by the namespace key layer.

Store errors are never wrapped here; whatever a backend raises reaches the
caller unchanged.
"""

from __future__ import annotations


class NamespaceError(Exception):
    """Base class for errors raised by kv_namespace itself."""


class SegmentTooLongError(NamespaceError, ValueError):
    """A namespace segment does not fit the 2-byte length tag."""

    def __init__(self, length: int, limit: int) -> None:
        msg = f"namespace segment is {length} bytes, longer than the {limit} byte limit"
        super().__init__(msg)
        self.length = length
        self.limit = limit


class UnboundedNamespaceError(NamespaceError, ValueError):
    """A prefix made only of 0xFF bytes has no finite upper bound of the same length."""

    def __init__(self, prefix: bytes) -> None:
        msg = f"prefix {prefix.hex()} has no upper bound: every byte is 0xff"
        super().__init__(msg)
        self.prefix = prefix


class DecodeError(NamespaceError):
    """A stored value could not be decoded into the expected type.

    ``key`` is the relative key inside the namespace, ``raw_key`` the full
    store key. The decoder's own exception is chained as ``__cause__``.
    """

    def __init__(self, key: bytes, raw_key: bytes, reason: str) -> None:
        msg = f"cannot decode value at key {key!r} (raw key {raw_key.hex()}): {reason}"
        super().__init__(msg)
        self.key = key
        self.raw_key = raw_key
        self.reason = reason
