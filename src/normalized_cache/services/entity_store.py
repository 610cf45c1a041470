"""Per-type store of canonical entities keyed by id."""

import logging
from collections.abc import Hashable, Mapping
from copy import deepcopy
from typing import Any

from normalized_cache.protocols import BoundedCache

logger = logging.getLogger(__name__)


class EntityStore:
    """Canonical, most-recent copy of each entity of one type.

    Every write overwrites the stored entity as a whole; entities are
    never merged field by field. Records without an id are skipped.

    Example:
        ```python
        store = EntityStore("user", MemoryBoundedCache.create(100))
        store.put({"id": 1, "name": "A"})
        store.get(1)  # {"id": 1, "name": "A"}
        ```
    """

    def __init__(self, entity_type: str, cache: BoundedCache, id_property: str = "id") -> None:
        """Initialize the entity store.

        Args:
            entity_type: Name of the entity type held by this store
            cache: Bounded cache backing the store
            id_property: Field holding each entity's id
        """
        self._type = entity_type
        self._cache = cache
        self._id_property = id_property

    def id_of(self, entity: Any) -> Hashable | None:
        """Return the entity's id, or None if it has none."""
        if not isinstance(entity, Mapping):
            return None
        return entity.get(self._id_property)

    def put(self, entity: Mapping[str, Any]) -> bool:
        """Store an entity at its id, replacing any previous copy.

        Returns:
            True if stored, False if the entity had no id and was skipped
        """
        entity_id = self.id_of(entity)
        if entity_id is None:
            logger.debug("Skipping %s entity without %r", self._type, self._id_property)
            return False
        self._cache.set(entity_id, entity)
        return True

    def put_all(self, data: Mapping[str, Any] | list | tuple) -> int:
        """Store one entity or each entity of a sequence.

        Returns:
            Number of entities stored
        """
        if isinstance(data, (list, tuple)):
            return sum(self.put(entity) for entity in data)
        return int(self.put(data))

    def get(self, entity_id: Hashable | None) -> Any | None:
        """Return a copy of the entity with this id, or None."""
        if entity_id is None:
            return None
        entity = self._cache.get(entity_id)
        return deepcopy(entity) if entity is not None else None

    def delete(self, data: Any) -> int:
        """Remove entities given as raw ids, entities, or a sequence of either.

        Returns:
            Number of entries removed
        """
        items = data if isinstance(data, (list, tuple)) else [data]
        removed = 0
        for item in items:
            entity_id = self.id_of(item) if isinstance(item, Mapping) else item
            if entity_id is not None and self._cache.delete(entity_id):
                removed += 1
        return removed

    def reset(self, data: Mapping[str, Any] | list | tuple | None = None) -> None:
        """Clear the store, or merge data into it.

        Without data every entry is removed. With data the given entities
        are written and entries not in data are left untouched.
        """
        if data is None:
            self._cache.clear()
            return
        self.put_all(data)

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def entity_type(self) -> str:
        return self._type

    @property
    def id_property(self) -> str:
        return self._id_property
