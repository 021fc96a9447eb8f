"""Minimal example for typed namespace scans against a Redis-compatible server."""

import msgspec

from kv_namespace import DecodeError, Namespace
from kv_namespace.backends.redis import RedisBackend
from kv_namespace.stores import RemoteStore


class User(msgspec.Struct):
    """Value stored under the users namespace."""

    name: str
    age: int


def main() -> None:
    """Write a few users, one of them malformed, and scan them back."""
    store = RemoteStore(RedisBackend(url="redis://redis:6379/0", key="example"))
    users = Namespace("app", "users")
    try:
        users.set(store, b"alice", msgspec.json.encode(User(name="alice", age=30)))
        users.set(store, b"bob", b'{"name": "bob"}')
        users.set(store, b"carol", msgspec.json.encode(User(name="carol", age=41)))

        for key, value in users.range_typed(store, type=User).results():
            if isinstance(value, DecodeError):
                print("bad value at", key, "->", value.reason)
            else:
                print(key, value)
    finally:
        store.close()


if __name__ == "__main__":
    main()
