"""FastAPI application exposing cache inspection and invalidation.

Mount it next to the service that owns the cache:

    ```python
    from normalized_cache.api.app import create_app

    admin = create_app(cache)
    ```
"""

from typing import Any

from fastapi import FastAPI

from normalized_cache.config import settings
from normalized_cache.dto import (
    BodyResponse,
    CacheStatsResponse,
    DeleteResponse,
    EntityResponse,
    HeadResponse,
    HealthCheckResponse,
    PeekRequest,
    ResetDataRequest,
    ResetRequestsRequest,
)
from normalized_cache.services import NormalizedCache

from .dependencies import HandlerDep, make_lifespan

API_VERSION = "0.1.0"


def create_app(cache: NormalizedCache | None = None) -> FastAPI:
    """Create the inspection app.

    Args:
        cache: Cache to serve. If None, one is built from settings at startup.

    Returns:
        The FastAPI application
    """
    app = FastAPI(
        title="Normalized Cache API",
        description="Inspection and invalidation of a normalized response cache",
        version=API_VERSION,
        lifespan=make_lifespan(lambda: cache if cache is not None else NormalizedCache.create()),
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Normalized Cache API",
            "version": API_VERSION,
            "endpoints": {
                "operations": "/operations",
                "entities": "/entities",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        return handler.health()

    @app.get("/stats", response_model=CacheStatsResponse)
    async def stats(handler: HandlerDep) -> CacheStatsResponse:
        return handler.get_stats()

    @app.post("/operations/{name}/head", response_model=HeadResponse)
    async def peek_head(name: str, request: PeekRequest, handler: HandlerDep) -> HeadResponse:
        """Return the metadata recorded for an operation and params."""
        return handler.peek_head(name, request)

    @app.post("/operations/{name}/body", response_model=BodyResponse)
    async def peek_body(name: str, request: PeekRequest, handler: HandlerDep) -> BodyResponse:
        """Return the reconstructed body for an operation and params."""
        return handler.peek_body(name, request)

    @app.post("/operations/{name}/reset", response_model=DeleteResponse)
    async def reset_requests(
        name: str, request: ResetRequestsRequest, handler: HandlerDep
    ) -> DeleteResponse:
        return handler.reset_requests(name, request)

    @app.delete("/operations", response_model=DeleteResponse)
    async def reset_all_requests(handler: HandlerDep) -> DeleteResponse:
        return handler.reset_all_requests()

    @app.get("/entities/{entity_type}/{entity_id}", response_model=EntityResponse)
    async def get_entity(entity_type: str, entity_id: str, handler: HandlerDep) -> EntityResponse:
        return handler.get_entity(entity_type, entity_id)

    @app.delete("/entities/{entity_type}/{entity_id}", response_model=DeleteResponse)
    async def delete_entity(
        entity_type: str, entity_id: str, handler: HandlerDep
    ) -> DeleteResponse:
        return handler.delete_entity(entity_type, entity_id)

    @app.put("/entities/{entity_type}", response_model=DeleteResponse)
    async def merge_entities(
        entity_type: str, request: ResetDataRequest, handler: HandlerDep
    ) -> DeleteResponse:
        """Write entities into a store, keeping entries not in the payload."""
        return handler.reset_data(entity_type, request)

    @app.delete("/entities/{entity_type}", response_model=DeleteResponse)
    async def clear_entities(entity_type: str, handler: HandlerDep) -> DeleteResponse:
        return handler.reset_data(entity_type, ResetDataRequest())

    @app.delete("/entities", response_model=DeleteResponse)
    async def reset_all_entities(handler: HandlerDep) -> DeleteResponse:
        return handler.reset_all_data()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "normalized_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
