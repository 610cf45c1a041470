import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Entities
    id_property: str = os.getenv("NORMALIZED_CACHE_ID_PROPERTY", "id")

    # Default request policy (unset means every operation must bring its own)
    request_max_entries: int | None = _optional_int("NORMALIZED_CACHE_REQUEST_MAX_ENTRIES")
    request_ttl: float | None = _optional_float("NORMALIZED_CACHE_REQUEST_TTL")

    # Default entity policy (unset means every entity type must bring its own)
    data_max_entries: int | None = _optional_int("NORMALIZED_CACHE_DATA_MAX_ENTRIES")
    data_ttl: float | None = _optional_float("NORMALIZED_CACHE_DATA_TTL")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.id_property:
            raise ValueError("NORMALIZED_CACHE_ID_PROPERTY must not be empty")

        for name in ("request_max_entries", "data_max_entries", "request_ttl", "data_ttl"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"NORMALIZED_CACHE_{name.upper()} must be positive, got {value}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
