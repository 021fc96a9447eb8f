"""Length-prefixed encoding of nested namespace segments.

Every segment is written as a 2-byte big-endian length followed by its bytes.
Because segments are length-tagged instead of separated by a delimiter, no
two different segment sequences encode to the same prefix, and ``foo`` can
never be confused with ``food``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kv_namespace.errors import SegmentTooLongError


if TYPE_CHECKING:
    from collections.abc import Sequence


LENGTH_TAG_SIZE = 2
MAX_SEGMENT_LENGTH = 0xFFFF


def encode_length(segment: bytes) -> bytes:
    """Return the 2-byte big-endian length tag for ``segment``."""
    length = len(segment)
    if length > MAX_SEGMENT_LENGTH:
        raise SegmentTooLongError(length, MAX_SEGMENT_LENGTH)
    return length.to_bytes(LENGTH_TAG_SIZE, "big")


def encode_nested_prefix(segments: Sequence[bytes]) -> bytes:
    """Encode ``segments`` into one namespace prefix.

    All segments are checked before anything is written, and the output
    buffer is sized once to its final length.
    """
    tags = [encode_length(segment) for segment in segments]
    size = sum(LENGTH_TAG_SIZE + len(segment) for segment in segments)

    out = bytearray(size)
    offset = 0
    for tag, segment in zip(tags, segments, strict=True):
        out[offset : offset + LENGTH_TAG_SIZE] = tag
        offset += LENGTH_TAG_SIZE
        out[offset : offset + len(segment)] = segment
        offset += len(segment)
    return bytes(out)


def to_length_prefixed(segment: bytes) -> bytes:
    """Encode a single-segment namespace."""
    return encode_nested_prefix((segment,))


def nested_namespaces_with_key(top_names: Sequence[bytes], sub_names: Sequence[bytes], key: bytes) -> bytes:
    """Build a full store key from namespace segments plus a trailing key.

    The trailing key is appended as-is, without a length tag, so that keys
    under one namespace keep their natural byte order.
    """
    return concat(encode_nested_prefix((*top_names, *sub_names)), key)


def concat(prefix: bytes, key: bytes) -> bytes:
    """Join a namespace prefix and a relative key into a store key."""
    return prefix + key


def trim(prefix: bytes, raw_key: bytes) -> bytes:
    """Strip the namespace prefix from a store key."""
    return raw_key[len(prefix) :]
