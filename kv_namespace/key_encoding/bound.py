"""Exclusive upper bound of the byte range occupied by a namespace."""

from __future__ import annotations

from kv_namespace.errors import UnboundedNamespaceError


def is_unbounded(prefix: bytes) -> bool:
    """Return True when ``prefix`` has no same-length upper bound.

    That is the case for an empty prefix and for one made only of 0xFF bytes;
    every key sorting at or after such a prefix starts with it.
    """
    return all(byte == 0xFF for byte in prefix)


def namespace_upper_bound(prefix: bytes, *, strict: bool = False) -> bytes:
    """Return the smallest byte string greater than every key starting with ``prefix``.

    Trailing 0xFF bytes are reset to 0x00 and the first byte before them is
    incremented. When every byte is 0xFF the result degenerates to all zeros,
    which is not a valid bound; pass ``strict=True`` to raise
    :class:`UnboundedNamespaceError` instead. Length-prefixed namespaces only
    hit this case for a 65535-byte segment of 0xFF bytes.
    """
    if strict and prefix and is_unbounded(prefix):
        raise UnboundedNamespaceError(prefix)

    bound = bytearray(prefix)
    for index in range(len(bound) - 1, -1, -1):
        if bound[index] == 0xFF:
            bound[index] = 0x00
        else:
            bound[index] += 1
            break
    return bytes(bound)
