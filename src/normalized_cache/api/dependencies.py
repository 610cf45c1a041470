"""Dependency injection configuration for the FastAPI app.

Pattern:
    - The cache and its handler are stored in app.state during lifespan
    - Routes reach the cache only through the handler dependency
"""

from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from normalized_cache.handlers import CacheHandler
from normalized_cache.services import NormalizedCache


def get_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


def make_lifespan(cache_factory: Callable[[], NormalizedCache]):
    """Build a lifespan that serves the cache returned by cache_factory."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cache = cache_factory()
        app.state.cache = cache
        app.state.cache_handler = CacheHandler(cache=cache)

        stats = cache.stats()
        print("✓ Normalized cache initialized")
        print(f"✓ Entity stores: {', '.join(stats['entities']) or 'none yet'}")

        yield

        # Let in-flight populations finish before the loop goes away
        await cache.drain()
        del app.state.cache_handler
        del app.state.cache
        print("✓ Normalized cache shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
