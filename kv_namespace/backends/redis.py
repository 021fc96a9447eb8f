"""Redis-compatible backend implementation."""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import Any, override


try:
    import redis.asyncio as redis_async
except ImportError:  # pragma: no cover - exercised when dependency is absent
    redis_async = None

from .protocol import AsyncBackend, Order, Page


logger = logging.getLogger(__name__)


def _normalize_bytes(value: str | bytes | None) -> bytes | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.encode()
    return value


def _lex_min(start: bytes | None) -> bytes:
    return b"-" if start is None else b"[" + start


def _lex_max(end: bytes | None) -> bytes:
    return b"+" if end is None else b"(" + end


class RedisBackend(AsyncBackend):
    """Redis-compatible async backend using ``redis.asyncio`` client APIs.

    Keys live in a sorted set where every member scores 0, so Redis orders
    them byte-lexicographically and ``ZRANGEBYLEX`` answers range scans.
    Values live in a hash next to it.
    """

    def __init__(self, url: str = "redis://localhost:6379/0", key: str = "kv_namespace", *, client: Any | None = None) -> None:
        """Create a backend from URL or an injected async client.

        Parameters
        ----------
        url
            Redis connection URL used when ``client`` is not provided.
        key
            Base Redis key; the index is ``{key}:keys`` and values ``{key}:values``.
        client
            Optional injected client with ``zadd/zrem/zrangebylex/zrevrangebylex/hget/hset/hdel/hmget/aclose`` API.
        """
        super().__init__()
        if not key:
            msg = "key must not be empty"
            raise ValueError(msg)
        self._url = url
        self._index_key = f"{key}:keys"
        self._values_key = f"{key}:values"
        if client is not None:
            self._client = client
            return

        if redis_async is None:
            msg = "redis dependency is required for RedisBackend; install with `uv add redis`"
            raise RuntimeError(msg)

        self._client = redis_async.from_url(url, decode_responses=False)

    @override
    async def get(self, key: bytes) -> bytes | None:
        """Return raw value for key, or None when key does not exist."""
        return _normalize_bytes(await self._client.hget(self._values_key, key))

    @override
    async def set(self, key: bytes, value: bytes) -> None:
        """Store raw value for key."""
        await self._client.hset(self._values_key, key, value)
        await self._client.zadd(self._index_key, {key: 0})

    @override
    async def remove(self, key: bytes) -> None:
        """Remove key if present."""
        await self._client.zrem(self._index_key, key)
        await self._client.hdel(self._values_key, key)

    @override
    async def range(
        self,
        start: bytes | None,
        end: bytes | None,
        order: Order,
        limit: int | None = None,
    ) -> Page:
        """Scan at most ``limit`` index members with ``start <= key < end`` in ``order``.

        Members whose value is missing (removed between the index read and
        the value read) are skipped but still count towards ``limit``.
        """
        paging: dict[str, int] = {} if limit is None else {"start": 0, "num": limit}
        if order is Order.ASCENDING:
            members = await self._client.zrangebylex(self._index_key, _lex_min(start), _lex_max(end), **paging)
        else:
            members = await self._client.zrevrangebylex(self._index_key, _lex_max(end), _lex_min(start), **paging)

        keys = [key for key in (_normalize_bytes(member) for member in members) if key is not None]
        if not keys:
            return Page()

        values = await self._client.hmget(self._values_key, keys)
        pairs: list[tuple[bytes, bytes]] = []
        for key, raw_value in zip(keys, values, strict=True):
            value = _normalize_bytes(raw_value)
            if value is None:
                logger.debug("skipping indexed key %r with no stored value", key)
                continue
            pairs.append((key, value))

        resume_after = keys[-1] if limit is not None and len(members) >= limit else None
        return Page(pairs, resume_after)

    @override
    async def close(self) -> None:
        """Release backend resources."""
        close_method = getattr(self._client, "aclose", None)
        if close_method is None:
            close_method = getattr(self._client, "close", None)
        if close_method is None:
            return

        maybe_awaitable = close_method()
        if isawaitable(maybe_awaitable):
            await maybe_awaitable
