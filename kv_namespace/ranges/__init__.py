"""Namespace-scoped range iteration."""

from .prefixed import RangeCursor, absolute_bounds, open_scan, range_within_namespace
from .typed import TypedRangeCursor, deserialize_kv, json_decoder, range_within_namespace_typed


__all__ = [
    "RangeCursor",
    "TypedRangeCursor",
    "absolute_bounds",
    "deserialize_kv",
    "json_decoder",
    "open_scan",
    "range_within_namespace",
    "range_within_namespace_typed",
]
