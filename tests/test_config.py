"""Tests for environment-driven settings."""

import pytest

from normalized_cache.config import Settings, get_settings


def test_defaults_are_valid():
    settings = get_settings()

    assert settings.id_property
    assert get_settings() is settings


def test_explicit_values():
    settings = Settings(id_property="uuid", request_max_entries=10, data_ttl=30.0)

    assert settings.id_property == "uuid"
    assert settings.request_max_entries == 10
    assert settings.data_ttl == 30.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"id_property": ""},
        {"request_max_entries": 0},
        {"data_max_entries": -1},
        {"request_ttl": 0.0},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)
