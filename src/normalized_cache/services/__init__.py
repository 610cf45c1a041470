"""Service layer.

Architecture:
    NormalizedCache -> Reconstructor -> RequestStore / EntityStore -> BoundedCache
    (orchestration)   (consistency)    (per operation / per type)   (eviction)

Usage:
    ```python
    from normalized_cache.services import NormalizedCache

    cache = NormalizedCache.create()
    ```
"""

from .cache_service import NormalizedCache
from .entity_store import EntityStore
from .reconstruction import Reconstructor
from .request_store import RequestStore

__all__ = [
    "EntityStore",
    "NormalizedCache",
    "Reconstructor",
    "RequestStore",
]
