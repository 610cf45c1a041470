"""Shared fixtures for the normalized cache tests."""

from typing import Any

import pytest

from normalized_cache import CachePolicy, EntityTypeConfig, FetchOptions, NormalizedCache


class FakeFetcher:
    """Async fetch function that records every call."""

    def __init__(self, name: str, response: Any = None, error: Exception | None = None) -> None:
        self.__name__ = name
        self.response = response
        self.error = error
        self.calls: list[tuple] = []

    async def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        if callable(self.response):
            return self.response(*args)
        return self.response

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def cache() -> NormalizedCache:
    """A cache with default policies for every entity type and operation."""
    return NormalizedCache(
        data_types={"post": EntityTypeConfig(id_property="slug")},
        default_data_cache=CachePolicy(max_entries=100),
        default_request_options=FetchOptions(cache=CachePolicy(max_entries=50)),
    )


@pytest.fixture
def get_user() -> FakeFetcher:
    return FakeFetcher(
        "getUser",
        response=lambda params: {"body": {"user": {"id": params["id"], "name": "A"}}},
    )


@pytest.fixture
def list_users() -> FakeFetcher:
    return FakeFetcher(
        "listUsers",
        response={"body": {"user": [{"id": 1}, {"id": 2}]}, "headers": {"x-total": "2"}},
    )
