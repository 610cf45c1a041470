"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class HeadResponse(BaseModel):
    """Response DTO for a metadata lookup."""

    operation: str = Field(..., description="Operation key")
    found: bool = Field(..., description="Whether metadata was ever recorded for these params")
    headers: Any = Field(None, description="Recorded metadata (null when recorded empty)")


class BodyResponse(BaseModel):
    """Response DTO for a reconstructed body lookup."""

    operation: str = Field(..., description="Operation key")
    found: bool = Field(..., description="Whether every referenced entity could be resolved")
    body: dict[str, Any] | None = Field(None, description="Reconstructed body")


class EntityResponse(BaseModel):
    """Response DTO for a single cached entity."""

    entity_type: str = Field(..., description="Entity type")
    entity: dict[str, Any] = Field(..., description="The cached entity")


class DeleteResponse(BaseModel):
    """Response DTO for delete and reset operations."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted: int | None = Field(None, description="Number of entries removed, when known", ge=0)
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    entities: dict[str, int] = Field(default_factory=dict, description="Entries per entity type")
    requests: dict[str, int] = Field(default_factory=dict, description="Requests per operation")
    pending_populations: int = Field(..., description="Population tasks not yet finished", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    entity_types: int = Field(..., description="Number of entity stores", ge=0)
    operations: int = Field(..., description="Number of operations with request stores", ge=0)
