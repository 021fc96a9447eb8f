"""Namespace prefix encoding and range bound utilities."""

from .bound import is_unbounded, namespace_upper_bound
from .prefix import (
    MAX_SEGMENT_LENGTH,
    concat,
    encode_length,
    encode_nested_prefix,
    nested_namespaces_with_key,
    to_length_prefixed,
    trim,
)


__all__ = [
    "MAX_SEGMENT_LENGTH",
    "concat",
    "encode_length",
    "encode_nested_prefix",
    "is_unbounded",
    "namespace_upper_bound",
    "nested_namespaces_with_key",
    "to_length_prefixed",
    "trim",
]
