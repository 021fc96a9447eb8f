import re

import pytest

from kv_namespace.backends import postgres as postgres_module
from kv_namespace.backends.postgres import PostgresBackend
from kv_namespace.backends.protocol import Order, Page


class UndefinedTableError(Exception):
    pass


def _arg(query: str, pattern: str, args: tuple[bytes | int, ...]) -> bytes | int | None:
    match = re.search(pattern, query)
    if match is None:
        return None
    return args[int(match.group(1)) - 1]


class _FakePostgresClient:
    def __init__(self, *, table_exists: bool = True) -> None:
        super().__init__()
        self.store: dict[bytes, bytes] = {}
        self.closed = False
        self.table_exists = table_exists
        self.queries: list[str] = []

    async def fetchrow(self, _query: str, key: bytes) -> dict[str, bytes] | None:
        if not self.table_exists:
            raise UndefinedTableError
        if key not in self.store:
            return None
        return {"v": self.store[key]}

    async def fetch(self, query: str, *args: bytes | int) -> list[tuple[bytes, bytes]]:
        if not self.table_exists:
            raise UndefinedTableError
        self.queries.append(query)
        low = _arg(query, r"k >= \$(\d)", args)
        high = _arg(query, r"k < \$(\d)", args)
        limit = _arg(query, r"LIMIT \$(\d)", args)
        keys = sorted(
            (key for key in self.store if (low is None or key >= low) and (high is None or key < high)),
            reverse="DESC" in query,
        )
        if limit is not None:
            keys = keys[: int(limit)]
        return [(key, self.store[key]) for key in keys]

    async def execute(self, query: str, *args: bytes) -> str:
        if query.startswith("CREATE TABLE IF NOT EXISTS"):
            self.table_exists = True
            return "CREATE TABLE"

        if not self.table_exists:
            raise UndefinedTableError

        if query.startswith("INSERT INTO"):
            key, value = args
            self.store[key] = value
            return "INSERT 0 1"
        if query.startswith("DELETE FROM"):
            key = args[0]
            _ = self.store.pop(key, None)
            return "DELETE 1"

        return "OK"

    async def close(self) -> None:
        self.closed = True


@pytest.mark.asyncio
async def test_postgres_backend_get_set_remove_roundtrip() -> None:
    backend = PostgresBackend(client=_FakePostgresClient(table_exists=True))

    await backend.set(b"\x00\x03foobar", b"none")
    assert await backend.get(b"\x00\x03foobar") == b"none"

    await backend.remove(b"\x00\x03foobar")
    assert await backend.get(b"\x00\x03foobar") is None


@pytest.mark.asyncio
async def test_postgres_backend_range_builds_bounded_query() -> None:
    client = _FakePostgresClient(table_exists=True)
    backend = PostgresBackend(client=client)
    for key in (b"c", b"a", b"b", b"d"):
        await backend.set(key, key.upper())

    assert await backend.range(b"b", b"d", Order.ASCENDING) == Page([(b"b", b"B"), (b"c", b"C")])
    assert client.queries[-1] == 'SELECT k, v FROM "kv_namespace" WHERE k >= $1 AND k < $2 ORDER BY k ASC'

    assert await backend.range(None, b"c", Order.DESCENDING, limit=1) == Page([(b"b", b"B")], resume_after=b"b")
    assert client.queries[-1] == 'SELECT k, v FROM "kv_namespace" WHERE k < $1 ORDER BY k DESC LIMIT $2'

    assert await backend.range(None, None, Order.ASCENDING) == Page([(b"a", b"A"), (b"b", b"B"), (b"c", b"C"), (b"d", b"D")])
    assert client.queries[-1] == 'SELECT k, v FROM "kv_namespace" ORDER BY k ASC'


@pytest.mark.asyncio
async def test_postgres_backend_range_resumes_only_after_full_page() -> None:
    backend = PostgresBackend(client=_FakePostgresClient(table_exists=True))
    for key in (b"a", b"b", b"c"):
        await backend.set(key, key.upper())

    assert await backend.range(None, None, Order.ASCENDING, limit=3) == Page(
        [(b"a", b"A"), (b"b", b"B"), (b"c", b"C")], resume_after=b"c"
    )
    assert await backend.range(b"b", None, Order.ASCENDING, limit=3) == Page([(b"b", b"B"), (b"c", b"C")])


@pytest.mark.asyncio
async def test_postgres_backend_missing_table_raises_runtime_error_when_create_disabled() -> None:
    backend = PostgresBackend(client=_FakePostgresClient(table_exists=False), create_table=False)

    with pytest.raises(RuntimeError, match="postgres table 'kv_namespace' is not available"):
        _ = await backend.get(b"key")
    with pytest.raises(RuntimeError, match="postgres table 'kv_namespace' is not available"):
        _ = await backend.range(None, None, Order.ASCENDING)


@pytest.mark.asyncio
async def test_postgres_backend_missing_table_can_be_created_when_enabled() -> None:
    backend = PostgresBackend(client=_FakePostgresClient(table_exists=False), create_table=True)

    await backend.set(b"key", b"value")
    assert await backend.get(b"key") == b"value"


@pytest.mark.asyncio
async def test_postgres_backend_close_closes_client() -> None:
    client = _FakePostgresClient(table_exists=True)
    backend = PostgresBackend(client=client)

    await backend.close()
    assert client.closed is True


@pytest.mark.asyncio
async def test_postgres_backend_requires_dependency_without_injected_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(postgres_module, "asyncpg_module", None)
    backend = PostgresBackend(client=None)

    with pytest.raises(RuntimeError, match="asyncpg dependency is required"):
        _ = await backend.get(b"key")


def test_postgres_backend_rejects_invalid_table_identifier() -> None:
    with pytest.raises(ValueError, match="valid unquoted SQL identifier"):
        _ = PostgresBackend(table="kv-store")
