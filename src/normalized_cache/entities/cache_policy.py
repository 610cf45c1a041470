"""Capacity policy and entity type declarations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachePolicy:
    """Capacity policy handed to the bounded cache primitive.

    Attributes:
        max_entries: Maximum number of entries before the least recently
            used one is evicted
        ttl: Optional time-to-live in seconds for every entry
    """

    max_entries: int
    ttl: float | None = None

    def __post_init__(self) -> None:
        if self.max_entries <= 0:
            raise ValueError(f"max_entries must be positive, got {self.max_entries}")
        if self.ttl is not None and self.ttl <= 0:
            raise ValueError(f"ttl must be positive, got {self.ttl}")


@dataclass(frozen=True)
class EntityTypeConfig:
    """Declaration of one entity type.

    Attributes:
        id_property: Field holding the entity id
        cache: Policy for this type's entity store. Falls back to the
            cache-wide default data policy when None.
    """

    id_property: str = "id"
    cache: CachePolicy | None = None
