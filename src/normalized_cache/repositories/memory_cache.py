"""In-process implementation of BoundedCache.

Backed by cachetools: an ``LRUCache`` for size-only policies and a
``TTLCache`` when the policy also carries a time-to-live.
"""

from collections.abc import Hashable
from typing import Any

from cachetools import Cache, LRUCache, TTLCache

from normalized_cache.entities import CachePolicy

_MISSING = object()


class MemoryBoundedCache:
    """cachetools implementation of the BoundedCache protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed.
    """

    def __init__(self, policy: CachePolicy) -> None:
        """Initialize the cache.

        Args:
            policy: Capacity policy (max entries and optional TTL)
        """
        self._policy = policy
        self._cache: Cache = (
            TTLCache(maxsize=policy.max_entries, ttl=policy.ttl)
            if policy.ttl is not None
            else LRUCache(maxsize=policy.max_entries)
        )

    @classmethod
    def create(cls, max_entries: int, ttl: float | None = None) -> "MemoryBoundedCache":
        """Factory method building the policy in place."""
        return cls(CachePolicy(max_entries=max_entries, ttl=ttl))

    def get(self, key: Hashable) -> Any | None:
        return self._cache.get(key)

    def set(self, key: Hashable, value: Any) -> None:
        self._cache[key] = value

    def delete(self, key: Hashable) -> bool:
        return self._cache.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        if isinstance(self._cache, TTLCache):
            self._cache.expire()
        return len(self._cache)

    @property
    def policy(self) -> CachePolicy:
        """Get the policy this cache was created with."""
        return self._policy


def create_bounded_cache(policy: CachePolicy) -> MemoryBoundedCache:
    """Default cache factory used by the stores."""
    return MemoryBoundedCache(policy)
