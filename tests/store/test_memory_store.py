from __future__ import annotations

import threading
from dataclasses import dataclass

import pytest

from src.hr_suite.hr_suite.core.exceptions import DuplicateKeyError, InvalidArgumentError, NotFoundError
from src.hr_suite.hr_suite.store import InMemoryCollectionStore


@dataclass(frozen=True)
class Item:
    id: str
    name: str


def test_insert_and_get_by_id():
    store = InMemoryCollectionStore[Item]("items")
    store.insert(Item("a", "first"))

    assert store.get_by_id("a") == Item("a", "first")
    assert store.get_by_id("missing") is None
    assert len(store) == 1


def test_insert_rejects_duplicate_id():
    store = InMemoryCollectionStore[Item]("items")
    store.insert(Item("a", "first"))

    with pytest.raises(DuplicateKeyError):
        store.insert(Item("a", "second"))
    assert store.get_by_id("a").name == "first"


def test_update_replaces_whole_record_and_keeps_position():
    store = InMemoryCollectionStore[Item]("items")
    for key in ("a", "b", "c"):
        store.insert(Item(key, key))

    store.update("b", Item("b", "renamed"))

    assert [i.name for i in store.enumerate()] == ["a", "renamed", "c"]


def test_update_requires_existing_record_and_matching_id():
    store = InMemoryCollectionStore[Item]("items")
    store.insert(Item("a", "first"))

    with pytest.raises(NotFoundError):
        store.update("zzz", Item("zzz", "ghost"))
    with pytest.raises(InvalidArgumentError):
        store.update("a", Item("b", "other"))


def test_enumerate_returns_a_snapshot():
    store = InMemoryCollectionStore[Item]("items")
    store.insert(Item("a", "first"))

    snapshot = store.enumerate()
    store.insert(Item("b", "second"))

    assert [i.id for i in snapshot] == ["a"]
    assert len(store.enumerate()) == 2


def test_concurrent_inserts_are_all_kept():
    store = InMemoryCollectionStore[Item]("items")

    def worker(offset: int) -> None:
        for n in range(200):
            store.insert(Item(f"{offset}-{n}", "x"))

    threads = [threading.Thread(target=worker, args=(t,)) for t in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 1600
