"""kv-namespace - collision-free nested namespaces over an ordered byte KV store"""

import logging

from ._version import version as __version__
from .backends import AsyncBackend, InMemoryStore, Order, Store
from .errors import DecodeError, NamespaceError, SegmentTooLongError, UnboundedNamespaceError
from .key_encoding import encode_nested_prefix, namespace_upper_bound, to_length_prefixed
from .namespace import Namespace
from .ranges import RangeCursor, TypedRangeCursor, range_within_namespace, range_within_namespace_typed
from .stores import RemoteStore


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "AsyncBackend",
    "DecodeError",
    "InMemoryStore",
    "Namespace",
    "NamespaceError",
    "Order",
    "RangeCursor",
    "RemoteStore",
    "SegmentTooLongError",
    "Store",
    "TypedRangeCursor",
    "UnboundedNamespaceError",
    "__version__",
    "encode_nested_prefix",
    "namespace_upper_bound",
    "range_within_namespace",
    "range_within_namespace_typed",
    "to_length_prefixed",
]
