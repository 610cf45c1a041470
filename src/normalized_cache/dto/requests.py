"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class PeekRequest(BaseModel):
    """Request DTO for looking up a cached operation without fetching."""

    params: Any = Field(None, description="Parameter value the operation was fetched with")


class ResetRequestsRequest(BaseModel):
    """Request DTO for invalidating an operation's cached requests."""

    params: Any = Field(
        None,
        description="Invalidate only this parameter value (if null, clears the operation)",
    )
    ids: dict[str, Any] | None = Field(
        None,
        description="Replace the cached references with these {type: id | [ids]} instead",
    )


class ResetDataRequest(BaseModel):
    """Request DTO for merging entities into an entity store."""

    data: dict[str, Any] | list[dict[str, Any]] | None = Field(
        None,
        description="Entity or entities to write (if null, clears the store)",
    )
