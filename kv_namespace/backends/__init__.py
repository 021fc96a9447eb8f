"""Store contracts and implementations."""

from .in_memory import InMemoryStore
from .postgres import PostgresBackend
from .protocol import AsyncBackend, Order, Page, Store
from .redis import RedisBackend


__all__ = ["AsyncBackend", "InMemoryStore", "Order", "Page", "PostgresBackend", "RedisBackend", "Store"]
