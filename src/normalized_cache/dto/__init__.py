"""Data Transfer Objects for API contracts.

These Pydantic models define the HTTP inspection contract.
Internal logic uses the entities package.
"""

from .requests import PeekRequest, ResetDataRequest, ResetRequestsRequest
from .responses import (
    BodyResponse,
    CacheStatsResponse,
    DeleteResponse,
    EntityResponse,
    HeadResponse,
    HealthCheckResponse,
)

__all__ = [
    "PeekRequest",
    "ResetRequestsRequest",
    "ResetDataRequest",
    "HeadResponse",
    "BodyResponse",
    "EntityResponse",
    "DeleteResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
