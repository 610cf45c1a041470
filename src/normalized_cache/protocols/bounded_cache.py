"""Bounded cache protocol.

Defines the get/set/delete/clear contract every store in this package is
built on. Capacity enforcement and recency tracking belong to the
implementation; the stores never look inside it.

Implementations can include:
- cachetools LRU/TTL caches (default, in-process)
- Any other mapping with its own eviction policy
"""

from collections.abc import Hashable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BoundedCache(Protocol):
    """Protocol for capacity-bound key/value caches.

    Example:
        ```python
        from normalized_cache.protocols import BoundedCache
        from normalized_cache.repositories import MemoryBoundedCache

        cache: BoundedCache = MemoryBoundedCache(CachePolicy(max_entries=100))
        ```
    """

    def get(self, key: Hashable) -> Any | None:
        """Return the value for key, or None if absent or evicted."""
        ...

    def set(self, key: Hashable, value: Any) -> None:
        """Store value at key, evicting other entries if needed."""
        ...

    def delete(self, key: Hashable) -> bool:
        """Remove key.

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        """Return the number of live entries."""
        ...
