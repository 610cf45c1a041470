"""HTTP handlers for cache inspection and invalidation.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error responses.
"""

from collections.abc import Hashable

from fastapi import HTTPException, status

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
from normalized_cache.errors import ConfigurationError
from normalized_cache.services import NormalizedCache


def _candidate_ids(entity_id: str) -> list[Hashable]:
    """Path ids arrive as strings; numeric ones may be stored as ints."""
    candidates: list[Hashable] = [entity_id]
    if entity_id.lstrip("-").isdigit():
        candidates.append(int(entity_id))
    return candidates


class CacheHandler:
    """HTTP handlers for a NormalizedCache.

    Example:
        ```python
        from normalized_cache.handlers import CacheHandler

        handler = CacheHandler(cache=NormalizedCache.create())

        @app.post("/operations/{name}/head", response_model=HeadResponse)
        async def peek_head(name: str, request: PeekRequest):
            return handler.peek_head(name, request)
        ```
    """

    def __init__(self, cache: NormalizedCache) -> None:
        """Initialize the cache handler.

        Args:
            cache: The cache to inspect (required).
        """
        self._cache = cache

    def peek_head(self, operation: str, request: PeekRequest) -> HeadResponse:
        """Handle POST /operations/{name}/head requests."""
        metadata = self._cache.peek_head(operation, request.params)
        return HeadResponse(
            operation=operation,
            found=metadata is not None,
            headers=metadata.headers if metadata is not None else None,
        )

    def peek_body(self, operation: str, request: PeekRequest) -> BodyResponse:
        """Handle POST /operations/{name}/body requests."""
        body = self._cache.peek_body(operation, request.params)
        return BodyResponse(operation=operation, found=body is not None, body=body)

    def reset_requests(self, operation: str, request: ResetRequestsRequest) -> DeleteResponse:
        """Handle POST /operations/{name}/reset requests."""
        if request.ids is not None and request.params is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="ids can only be replaced for a specific params value",
            )

        if self._cache.request_store(operation) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown operation: {operation}",
            )

        self._cache.reset_requests(operation, request.params, request.ids)

        if request.params is None:
            message = f"Cleared all requests for {operation}"
        elif request.ids is not None:
            message = f"Replaced references for {operation}"
        else:
            message = f"Invalidated request for {operation}"
        return DeleteResponse(success=True, message=message)

    def reset_all_requests(self) -> DeleteResponse:
        """Handle DELETE /operations requests."""
        count = len(self._cache.request_stores)
        self._cache.reset_requests()
        return DeleteResponse(success=True, deleted=count, message=f"Dropped {count} operations")

    def get_entity(self, entity_type: str, entity_id: str) -> EntityResponse:
        """Handle GET /entities/{type}/{id} requests."""
        store = self._cache.entity_store(entity_type)
        if store is not None:
            for candidate in _candidate_ids(entity_id):
                entity = store.get(candidate)
                if entity is not None:
                    return EntityResponse(entity_type=entity_type, entity=entity)

        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity_type} {entity_id} is not cached",
        )

    def delete_entity(self, entity_type: str, entity_id: str) -> DeleteResponse:
        """Handle DELETE /entities/{type}/{id} requests."""
        deleted = 0
        for candidate in _candidate_ids(entity_id):
            deleted += self._cache.delete_data(entity_type, candidate)
        return DeleteResponse(
            success=deleted > 0,
            deleted=deleted,
            message=f"Deleted {deleted} {entity_type} entries",
        )

    def reset_data(self, entity_type: str, request: ResetDataRequest) -> DeleteResponse:
        """Handle PUT /entities/{type} and DELETE /entities/{type} requests."""
        try:
            self._cache.reset_data(entity_type, request.data)
        except ConfigurationError as e:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(e),
            ) from e

        message = f"Cleared {entity_type}" if request.data is None else f"Merged into {entity_type}"
        return DeleteResponse(success=True, message=message)

    def reset_all_data(self) -> DeleteResponse:
        """Handle DELETE /entities requests."""
        count = len(self._cache.entity_stores)
        self._cache.reset_data()
        return DeleteResponse(success=True, deleted=count, message=f"Dropped {count} entity stores")

    def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        return CacheStatsResponse(**self._cache.stats())

    def health(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        return HealthCheckResponse(
            status="healthy",
            entity_types=len(self._cache.entity_stores),
            operations=len(self._cache.request_stores),
        )
