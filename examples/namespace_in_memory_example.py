"""Minimal example for namespaced range scans on the in-memory store."""

from kv_namespace import InMemoryStore, Namespace, Order


def main() -> None:
    """Show that sibling namespaces sharing a textual prefix stay apart."""
    store = InMemoryStore()
    foo = Namespace("foo")
    food = Namespace("food")

    foo.set(store, b"bar", b"none")
    foo.set(store, b"snowy", b"day")
    food.set(store, b"moon", b"buggy")

    print("foo ascending:", list(foo.range(store)))
    print("foo descending:", list(foo.range(store, order=Order.DESCENDING)))
    print("foo from 'b' to 'c':", list(foo.range(store, b"b", b"c")))
    print("food:", list(food.range(store)))


if __name__ == "__main__":
    main()
