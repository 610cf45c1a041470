"""Tests for request stores and reconstruction."""

import pytest

from normalized_cache import (
    EntityStore,
    Many,
    MemoryBoundedCache,
    Reconstructor,
    RecordedMetadata,
    RequestRecord,
    RequestStore,
    Single,
)


@pytest.fixture
def caches():
    return MemoryBoundedCache.create(max_entries=10), MemoryBoundedCache.create(max_entries=10)


@pytest.fixture
def request_store(caches) -> RequestStore:
    requests, metadata = caches
    return RequestStore("listUsers", requests, metadata)


@pytest.fixture
def user_store() -> EntityStore:
    store = EntityStore("user", MemoryBoundedCache.create(max_entries=10))
    store.put_all([{"id": 1, "name": "A"}, {"id": 2, "name": "B"}])
    return store


@pytest.fixture
def reconstructor(request_store, user_store) -> Reconstructor:
    return Reconstructor({"listUsers": request_store}, {"user": user_store})


def test_rebuilds_sequences_in_order(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Many((2, 1))}))
    request_store.set_metadata("h", RecordedMetadata({"etag": "x"}))

    assert reconstructor.reconstruct("listUsers", "h") == {
        "body": {"user": [{"id": 2, "name": "B"}, {"id": 1, "name": "A"}]},
        "headers": {"etag": "x"},
    }


def test_rebuilds_tuple_sequences_as_tuples(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Many((1, 2), sequence=tuple)}))
    request_store.set_metadata("h", RecordedMetadata())

    body = reconstructor.reconstruct("listUsers", "h")["body"]
    assert body == {"user": ({"id": 1, "name": "A"}, {"id": 2, "name": "B"})}


def test_rebuilds_single_entities(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Single(1)}))
    request_store.set_metadata("h", RecordedMetadata())

    assert reconstructor.reconstruct("listUsers", "h") == {
        "body": {"user": {"id": 1, "name": "A"}},
        "headers": None,
    }


def test_unknown_operation_or_fingerprint_misses(request_store, reconstructor):
    request_store.set_metadata("h", RecordedMetadata())

    assert reconstructor.reconstruct("other", "h") is None
    assert reconstructor.reconstruct("listUsers", "h") is None


def test_never_recorded_metadata_misses(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Single(1)}))

    assert reconstructor.reconstruct("listUsers", "h") is None


def test_metadata_evicted_independently_misses(caches, request_store, reconstructor):
    _, metadata = caches
    request_store.set_request("h", RequestRecord(refs={"user": Single(1)}))
    request_store.set_metadata("h", RecordedMetadata())
    metadata.delete("h")

    assert request_store.get_request("h") is not None
    assert reconstructor.reconstruct("listUsers", "h") is None


def test_any_missing_entity_misses(request_store, user_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Many((1, 2))}))
    request_store.set_metadata("h", RecordedMetadata())
    user_store.delete(2)

    assert reconstructor.reconstruct("listUsers", "h") is None


def test_missing_entity_store_misses(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Single(1), "post": Single("x")}))
    request_store.set_metadata("h", RecordedMetadata())

    assert reconstructor.reconstruct("listUsers", "h") is None


def test_placeholder_reference_misses(request_store, reconstructor):
    request_store.set_request("h", RequestRecord(refs={"user": Many((1, None))}))
    request_store.set_metadata("h", RecordedMetadata())

    assert reconstructor.reconstruct("listUsers", "h") is None


def test_invalidate_keeps_metadata(request_store):
    request_store.set_request("h", RequestRecord(refs={}))
    request_store.set_metadata("h", RecordedMetadata({"a": 1}))

    assert request_store.invalidate("h") is True
    assert request_store.get_request("h") is None
    assert request_store.get_metadata("h") == RecordedMetadata({"a": 1})


def test_reset_clears_both(request_store):
    request_store.set_request("h", RequestRecord(refs={}))
    request_store.set_metadata("h", RecordedMetadata())
    request_store.reset()

    assert request_store.get_request("h") is None
    assert request_store.get_metadata("h") is None


def test_record_from_ids():
    record = RequestRecord.from_ids({"user": [1, 2], "post": "hello"})

    assert record.refs == {"user": Many((1, 2)), "post": Single("hello")}


def test_record_from_ids_keeps_tuple_shape():
    record = RequestRecord.from_ids({"user": (1, 2)})

    assert record.refs == {"user": Many((1, 2), sequence=tuple)}
