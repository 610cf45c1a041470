"""HTTP handlers for cache inspection."""

from .cache_handler import CacheHandler

__all__ = ["CacheHandler"]
