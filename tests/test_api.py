"""
Tests for the normalized cache inspection API.
"""

import pytest
from fastapi.testclient import TestClient

from normalized_cache import CachePolicy, FetchOptions, NormalizedCache, fingerprint
from normalized_cache.api.app import create_app


@pytest.fixture
def cache() -> NormalizedCache:
    cache = NormalizedCache(
        default_data_cache=CachePolicy(max_entries=100),
        default_request_options=FetchOptions(cache=CachePolicy(max_entries=50)),
    )
    cache.populate(
        "listUsers",
        fingerprint({"page": 1}),
        {"body": {"user": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}, "headers": {"etag": "x"}},
        FetchOptions(cache=CachePolicy(max_entries=50)),
    )
    return cache


@pytest.fixture
def client(cache):
    """Create a test client with the lifespan running."""
    with TestClient(create_app(cache)) as client:
        yield client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Normalized Cache API"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "entity_types": 1, "operations": 1}


def test_stats(client):
    response = client.get("/stats")
    assert response.status_code == 200
    assert response.json() == {
        "entities": {"user": 2},
        "requests": {"listUsers": 1},
        "pending_populations": 0,
    }


def test_peek_head(client):
    response = client.post("/operations/listUsers/head", json={"params": {"page": 1}})
    assert response.status_code == 200
    assert response.json() == {"operation": "listUsers", "found": True, "headers": {"etag": "x"}}

    response = client.post("/operations/listUsers/head", json={"params": {"page": 2}})
    assert response.json()["found"] is False


def test_peek_body(client):
    response = client.post("/operations/listUsers/body", json={"params": {"page": 1}})
    assert response.status_code == 200
    data = response.json()
    assert data["found"] is True
    assert data["body"] == {"user": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]}


def test_get_and_delete_entity(client):
    response = client.get("/entities/user/1")
    assert response.status_code == 200
    assert response.json()["entity"] == {"id": 1, "name": "A"}

    response = client.delete("/entities/user/1")
    assert response.json()["deleted"] == 1

    assert client.get("/entities/user/1").status_code == 404
    body = client.post("/operations/listUsers/body", json={"params": {"page": 1}}).json()
    assert body["found"] is False


def test_merge_and_clear_entities(client):
    response = client.put("/entities/user", json={"data": [{"id": 3, "name": "C"}]})
    assert response.status_code == 200
    assert client.get("/stats").json()["entities"] == {"user": 3}

    client.delete("/entities/user")
    assert client.get("/stats").json()["entities"] == {"user": 0}

    client.delete("/entities")
    assert client.get("/stats").json()["entities"] == {}


def test_reset_requests(client):
    response = client.post(
        "/operations/listUsers/reset",
        json={"params": {"page": 1}, "ids": {"user": [2]}},
    )
    assert response.status_code == 200
    body = client.post("/operations/listUsers/body", json={"params": {"page": 1}}).json()
    assert body["body"] == {"user": [{"id": 2, "name": "B"}]}

    client.post("/operations/listUsers/reset", json={"params": {"page": 1}})
    body = client.post("/operations/listUsers/body", json={"params": {"page": 1}}).json()
    assert body["found"] is False


def test_reset_requests_validation(client):
    response = client.post("/operations/listUsers/reset", json={"ids": {"user": [2]}})
    assert response.status_code == 400

    response = client.post("/operations/unknown/reset", json={})
    assert response.status_code == 404


def test_reset_all_requests(client):
    response = client.delete("/operations")
    assert response.json()["deleted"] == 1
    assert client.get("/stats").json()["requests"] == {}
