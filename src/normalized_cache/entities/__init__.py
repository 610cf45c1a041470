"""Domain entities for internal representation.

These are pure dataclasses (frozen) shared by the stores and the
orchestrator. They are NOT used for the HTTP contract - use DTOs
from the dto package for that.
"""

from .cache_policy import CachePolicy, EntityTypeConfig
from .fetch_options import BodyTransform, FetchOptions, Rule
from .records import CompositeResponse, Many, RecordedMetadata, Reference, RequestRecord, Single

__all__ = [
    "BodyTransform",
    "CachePolicy",
    "CompositeResponse",
    "EntityTypeConfig",
    "FetchOptions",
    "Many",
    "RecordedMetadata",
    "Reference",
    "RequestRecord",
    "Rule",
    "Single",
]
