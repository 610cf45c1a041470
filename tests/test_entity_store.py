"""Tests for the per-type entity store."""

import pytest

from normalized_cache import EntityStore, MemoryBoundedCache


@pytest.fixture
def store() -> EntityStore:
    return EntityStore("user", MemoryBoundedCache.create(max_entries=10))


def test_put_and_get(store):
    assert store.put({"id": 1, "name": "A"}) is True
    assert store.get(1) == {"id": 1, "name": "A"}


def test_put_overwrites_instead_of_merging(store):
    store.put({"id": 1, "name": "A", "email": "a@example.com"})
    store.put({"id": 1, "name": "B"})

    assert store.get(1) == {"id": 1, "name": "B"}


def test_put_skips_entities_without_id(store):
    assert store.put({"name": "nobody"}) is False
    assert len(store) == 0


def test_put_all_handles_single_and_sequence(store):
    assert store.put_all({"id": 1}) == 1
    assert store.put_all([{"id": 2}, {"name": "no id"}, {"id": 3}]) == 2
    assert len(store) == 3


def test_custom_id_property():
    store = EntityStore("post", MemoryBoundedCache.create(max_entries=10), id_property="slug")
    store.put({"slug": "hello", "title": "Hello"})

    assert store.get("hello") == {"slug": "hello", "title": "Hello"}
    assert store.id_property == "slug"


def test_get_returns_a_copy(store):
    store.put({"id": 1, "tags": ["a"]})
    store.get(1)["tags"].append("b")

    assert store.get(1) == {"id": 1, "tags": ["a"]}


def test_delete_accepts_ids_entities_and_sequences(store):
    store.put_all([{"id": 1}, {"id": 2}, {"id": 3}, {"id": 4}])

    assert store.delete(1) == 1
    assert store.delete({"id": 2}) == 1
    assert store.delete([3, {"id": 4}, 99]) == 2
    assert len(store) == 0


def test_reset_without_data_clears(store):
    store.put_all([{"id": 1}, {"id": 2}])
    store.reset()

    assert len(store) == 0


def test_reset_with_data_merges(store):
    store.put_all([{"id": 1, "v": 1}, {"id": 2, "v": 1}])
    store.reset([{"id": 2, "v": 2}, {"id": 3, "v": 2}])

    assert store.get(1) == {"id": 1, "v": 1}
    assert store.get(2) == {"id": 2, "v": 2}
    assert store.get(3) == {"id": 3, "v": 2}
