"""Normalized Cache - two-tier response caching for async fetch functions.

Fetch results are cached twice: per request, as entity id references
keyed by operation name and a fingerprint of the params, and per entity,
keyed by entity type and id. A cached request is served only while every
entity it references is still in its entity store.

Layers:
    - protocols: Interface contracts (BoundedCache, Fetcher)
    - repositories: cachetools-backed bounded caches
    - entities: Domain models (policies, options, records)
    - services: Stores, reconstruction and orchestration
    - handlers / dto / api: Optional HTTP inspection surface

Usage:
    ```python
    from normalized_cache import NormalizedCache

    cache = NormalizedCache.create()
    response = await cache.fetch(get_user, {"id": 1})
    ```
"""

from normalized_cache.config import get_settings, settings
from normalized_cache.entities import (
    CachePolicy,
    CompositeResponse,
    EntityTypeConfig,
    FetchOptions,
    Many,
    RecordedMetadata,
    RequestRecord,
    Single,
)
from normalized_cache.errors import (
    ConfigurationError,
    MissingCachePolicyError,
    MissingOperationKeyError,
    NormalizedCacheError,
)
from normalized_cache.fingerprint import fingerprint
from normalized_cache.protocols import BoundedCache, Fetcher
from normalized_cache.repositories import MemoryBoundedCache, create_bounded_cache
from normalized_cache.services import EntityStore, NormalizedCache, Reconstructor, RequestStore

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "BoundedCache",
    "Fetcher",
    # Services
    "NormalizedCache",
    "EntityStore",
    "RequestStore",
    "Reconstructor",
    # Repositories
    "MemoryBoundedCache",
    "create_bounded_cache",
    # Entities
    "CachePolicy",
    "CompositeResponse",
    "EntityTypeConfig",
    "FetchOptions",
    "Many",
    "RecordedMetadata",
    "RequestRecord",
    "Single",
    # Errors
    "NormalizedCacheError",
    "ConfigurationError",
    "MissingCachePolicyError",
    "MissingOperationKeyError",
    # Fingerprinting
    "fingerprint",
]
