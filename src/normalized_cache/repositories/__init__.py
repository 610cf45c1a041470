"""Concrete implementations of the protocols."""

from .memory_cache import MemoryBoundedCache, create_bounded_cache

__all__ = [
    "MemoryBoundedCache",
    "create_bounded_cache",
]
