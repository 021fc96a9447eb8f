from kv_namespace.backends.in_memory import InMemoryStore
from kv_namespace.backends.protocol import Order


def _filled() -> InMemoryStore:
    store = InMemoryStore()
    for key in (b"c", b"a", b"e", b"b", b"d"):
        store.set(key, key.upper())
    return store


def test_get_set_remove_roundtrip() -> None:
    store = InMemoryStore()
    store.set(b"k", b"v")
    assert store.get(b"k") == b"v"

    store.set(b"k", b"w")
    assert store.get(b"k") == b"w"
    assert len(store) == 1

    store.remove(b"k")
    assert store.get(b"k") is None
    assert len(store) == 0


def test_remove_missing_is_noop() -> None:
    store = InMemoryStore()
    store.remove(b"missing")
    assert store.get(b"missing") is None


def test_range_is_half_open_and_ordered() -> None:
    store = _filled()

    assert [key for key, _ in store.range(b"b", b"d", Order.ASCENDING)] == [b"b", b"c"]
    assert [key for key, _ in store.range(b"b", b"d", Order.DESCENDING)] == [b"c", b"b"]
    assert [key for key, _ in store.range(None, None, Order.ASCENDING)] == [b"a", b"b", b"c", b"d", b"e"]
    assert [key for key, _ in store.range(b"d", None, Order.ASCENDING)] == [b"d", b"e"]
    assert [key for key, _ in store.range(None, b"b", Order.DESCENDING)] == [b"a"]
    assert list(store.range(b"d", b"b", Order.ASCENDING)) == []


def test_range_orders_bytes_unsigned() -> None:
    store = InMemoryStore()
    store.set(b"\xff", b"high")
    store.set(b"\x00", b"low")
    store.set(b"\x7f", b"mid")

    assert [value for _, value in store.range(None, None, Order.ASCENDING)] == [b"low", b"mid", b"high"]


def test_range_survives_mutation_during_scan() -> None:
    store = _filled()
    scan = store.range(None, None, Order.ASCENDING)

    assert next(scan) == (b"a", b"A")
    store.remove(b"b")
    store.set(b"bb", b"BB")

    assert [key for key, _ in scan] == [b"c", b"d", b"e"]
