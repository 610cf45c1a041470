"""Protocol interfaces for swappable implementations.

Usage:
    ```python
    from normalized_cache.protocols import BoundedCache, Fetcher
    ```
"""

from .bounded_cache import BoundedCache
from .fetcher import Fetcher

__all__ = [
    "BoundedCache",
    "Fetcher",
]
