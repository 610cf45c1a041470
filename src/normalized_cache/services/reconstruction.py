"""Rebuilding composite responses from request records.

Reconstruction is all-or-nothing: if a single referenced entity cannot
be resolved, the whole request is a miss and no partial body is ever
returned.
"""

import logging
from collections.abc import Mapping
from typing import Any

from normalized_cache.entities import CompositeResponse, Many, RequestRecord, Single

from .entity_store import EntityStore
from .request_store import RequestStore

logger = logging.getLogger(__name__)


class Reconstructor:
    """Resolve request records against the entity stores.

    The store maps are owned by the cache and shared by reference; the
    reconstructor only reads them.
    """

    def __init__(
        self,
        request_stores: Mapping[str, RequestStore],
        entity_stores: Mapping[str, EntityStore],
    ) -> None:
        """Initialize the reconstructor.

        Args:
            request_stores: Operation -> RequestStore map
            entity_stores: Entity type -> EntityStore map
        """
        self._request_stores = request_stores
        self._entity_stores = entity_stores

    def reconstruct(self, operation: str, fingerprint: str) -> CompositeResponse | None:
        """Rebuild the response cached for (operation, fingerprint).

        Steps:
        1. Look up the request record
        2. Look up the metadata record (recorded-empty is fine, never-recorded is a miss)
        3. Resolve every referenced id against its entity store

        Returns:
            ``{"body": ..., "headers": ...}`` or None on any miss
        """
        store = self._request_stores.get(operation)
        if store is None:
            return None

        record = store.get_request(fingerprint)
        if record is None:
            return None

        metadata = store.get_metadata(fingerprint)
        if metadata is None:
            logger.debug("No metadata recorded for %s:%s", operation, fingerprint)
            return None

        body = self.resolve(record)
        if body is None:
            return None

        return {"body": body, "headers": metadata.headers}

    def resolve(self, record: RequestRecord) -> dict[str, Any] | None:
        """Resolve every reference of a record, or return None if any is missing."""
        entity_stores = self._entity_stores
        body: dict[str, Any] = {}

        for entity_type, ref in record.refs.items():
            entity_store = entity_stores.get(entity_type)
            if entity_store is None:
                return None

            if isinstance(ref, Many):
                entities = []
                for entity_id in ref.ids:
                    entity = entity_store.get(entity_id)
                    if entity is None:
                        logger.debug("Unresolvable %s reference %r", entity_type, entity_id)
                        return None
                    entities.append(entity)
                body[entity_type] = ref.sequence(entities)
            elif isinstance(ref, Single):
                entity = entity_store.get(ref.id)
                if entity is None:
                    logger.debug("Unresolvable %s reference %r", entity_type, ref.id)
                    return None
                body[entity_type] = entity
            else:
                raise TypeError(f"Unknown reference type: {type(ref).__name__}")

        return body
