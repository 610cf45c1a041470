"""Normalized cache orchestration.

This service ties the stores together: it checks bypass rules, tries to
reconstruct a cached response, falls back to the caller's fetch function,
and populates the request, metadata and entity stores from the result.
"""

import asyncio
import logging
from collections.abc import Callable, Hashable, Mapping
from copy import deepcopy
from types import MappingProxyType
from typing import Any

from normalized_cache.config import settings
from normalized_cache.entities import (
    CachePolicy,
    CompositeResponse,
    EntityTypeConfig,
    FetchOptions,
    Many,
    RecordedMetadata,
    Reference,
    RequestRecord,
    Single,
)
from normalized_cache.errors import MissingCachePolicyError, MissingOperationKeyError
from normalized_cache.fingerprint import fingerprint
from normalized_cache.protocols import BoundedCache, Fetcher
from normalized_cache.repositories import create_bounded_cache

from .entity_store import EntityStore
from .reconstruction import Reconstructor
from .request_store import RequestStore

logger = logging.getLogger(__name__)

CacheFactory = Callable[[CachePolicy], BoundedCache]
OperationKey = str | Callable[..., Any]


class NormalizedCache:
    """Two-tier cache in front of async fetch functions.

    Responses are cached per request, as entity id references keyed by
    operation name and parameter fingerprint, and per entity, keyed by
    entity type and id. A cached request is only served if every entity
    it references can still be resolved.

    Each instance owns its stores; instances never share storage.

    Example:
        ```python
        from normalized_cache import CachePolicy, FetchOptions, NormalizedCache

        cache = NormalizedCache(
            default_data_cache=CachePolicy(max_entries=1000),
            default_request_options=FetchOptions(cache=CachePolicy(max_entries=100)),
        )

        async def get_user(params):
            return {"body": {"user": await api.user(params["id"])}}

        response = await cache.fetch(get_user, {"id": 1})
        ```
    """

    def __init__(
        self,
        data_types: Mapping[str, EntityTypeConfig] | None = None,
        default_data_cache: CachePolicy | None = None,
        default_request_options: FetchOptions | None = None,
        default_id_property: str = "id",
        cache_factory: CacheFactory = create_bounded_cache,
    ) -> None:
        """Initialize the cache.

        Args:
            data_types: Entity type declarations (id property, policy)
            default_data_cache: Policy for entity types without their own
            default_request_options: Options used when a call passes none;
                its ``cache`` is the default request policy.
            default_id_property: Id field for undeclared entity types
            cache_factory: Builds the bounded cache behind every store
        """
        self._data_types = dict(data_types or {})
        self._default_data_cache = default_data_cache
        self._default_request_options = default_request_options or FetchOptions()
        self._default_id_property = default_id_property
        self._cache_factory = cache_factory

        self._entity_stores: dict[str, EntityStore] = {}
        self._request_stores: dict[str, RequestStore] = {}
        self._pending: set[asyncio.Task] = set()
        self._reconstructor = Reconstructor(self._request_stores, self._entity_stores)

        self._set_up_entity_stores()

    @classmethod
    def create(
        cls,
        data_types: Mapping[str, EntityTypeConfig] | None = None,
        default_data_cache: CachePolicy | None = None,
        default_request_cache: CachePolicy | None = None,
        cache_factory: CacheFactory = create_bounded_cache,
    ) -> "NormalizedCache":
        """Factory method filling unspecified defaults from settings.

        Args:
            data_types: Entity type declarations
            default_data_cache: Default entity policy. If None, uses settings.
            default_request_cache: Default request policy. If None, uses settings.
            cache_factory: Builds the bounded cache behind every store

        Returns:
            Configured NormalizedCache instance
        """
        if default_data_cache is None and settings.data_max_entries:
            default_data_cache = CachePolicy(settings.data_max_entries, settings.data_ttl)
        if default_request_cache is None and settings.request_max_entries:
            default_request_cache = CachePolicy(settings.request_max_entries, settings.request_ttl)

        return cls(
            data_types=data_types,
            default_data_cache=default_data_cache,
            default_request_options=FetchOptions(cache=default_request_cache),
            default_id_property=settings.id_property,
            cache_factory=cache_factory,
        )

    def _set_up_entity_stores(self) -> None:
        """Create the stores of declared types that have a policy."""
        for entity_type in self._data_types:
            if self.get_data_cache_policy(entity_type) is not None:
                self._create_entity_store(entity_type)

    # Fetching

    async def fetch(
        self,
        fn: Fetcher,
        params: Any = None,
        options: FetchOptions | None = None,
    ) -> Any:
        """Return the cached response for fn(params), fetching on a miss.

        On a miss (or when a rule bypasses the cache) fn is awaited and its
        result is returned unchanged. The stores are populated afterwards in
        a background task; use ``drain()`` to wait for it.

        Args:
            fn: Async fetch function returning ``{"body": ..., "headers": ...}``
            params: Parameter value. A list or tuple is spread as
                positional arguments; None calls fn without arguments.
            options: Per-call options. Defaults to the default request options.

        Returns:
            The cached composite response or fn's raw result

        Raises:
            MissingOperationKeyError: If no operation key can be determined
            MissingCachePolicyError: If the operation is new and has no policy
        """
        options = (options or self._default_request_options).with_defaults(
            self._default_request_options
        )
        key = self.operation_key(fn, options)

        if key not in self._request_stores and options.cache is None:
            raise MissingCachePolicyError(key)

        params_hash = fingerprint(params)

        if self._passes_rules(params, options):
            cached = self._reconstructor.reconstruct(key, params_hash)
            if cached is not None:
                logger.debug("Cache hit for %s:%s", key, params_hash)
                if options.unformat:
                    cached["body"] = options.unformat(cached["body"])
                return cached
            logger.debug("Cache miss for %s:%s", key, params_hash)
        else:
            logger.debug("Rule bypassed cache for %s:%s", key, params_hash)

        result = await self._call(fn, params)
        try:
            data = deepcopy(result)
        except Exception:
            logger.exception("Not caching %s:%s: result could not be copied", key, params_hash)
            return result
        self._schedule_population(key, params_hash, data, options)
        return result

    async def fetch_by_id(
        self,
        entity_type: str,
        entity_id: Hashable,
        fn: Fetcher,
        params: Any = None,
        options: FetchOptions | None = None,
    ) -> Any:
        """Return a single cached entity, or fall back to ``fetch``.

        A hit skips the request stores and the rules entirely and returns
        ``{entity_type: entity}``, passed through ``unformat`` if set.
        """
        options = options or self._default_request_options
        store = self._entity_stores.get(entity_type)
        if store is not None:
            entity = store.get(entity_id)
            if entity is not None:
                logger.debug("Entity hit for %s:%r", entity_type, entity_id)
                result: Any = {entity_type: entity}
                if options.unformat:
                    result = options.unformat(result)
                return result

        return await self.fetch(fn, params, options)

    @staticmethod
    def operation_key(fn: Callable[..., Any] | None, options: FetchOptions | None = None) -> str:
        """Resolve the operation key from the options or the function name."""
        if options is not None and options.name:
            return options.name
        name = getattr(fn, "__name__", None)
        if not name or name == "<lambda>":
            raise MissingOperationKeyError()
        return name

    @staticmethod
    def _passes_rules(params: Any, options: FetchOptions) -> bool:
        return all(rule(params) for rule in options.rules)

    @staticmethod
    async def _call(fn: Fetcher, params: Any) -> Any:
        if params is None:
            return await fn()
        if isinstance(params, (list, tuple)):
            return await fn(*params)
        return await fn(params)

    # Population

    def _schedule_population(
        self, key: str, params_hash: str, data: Any, options: FetchOptions
    ) -> None:
        task = asyncio.get_running_loop().create_task(
            self._populate_async(key, params_hash, data, options)
        )
        self._pending.add(task)
        task.add_done_callback(self._population_done)

    def _population_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Cache population failed", exc_info=error)

    async def _populate_async(
        self, key: str, params_hash: str, data: Any, options: FetchOptions
    ) -> None:
        self.populate(key, params_hash, data, options)

    def populate(self, key: str, params_hash: str, data: Any, options: FetchOptions) -> None:
        """Write a fetch result to the entity, request and metadata stores.

        Entities are written first so a request record is never stored
        when its entity stores could not be created.
        """
        if not isinstance(data, Mapping) or not isinstance(data.get("body"), Mapping):
            logger.warning("Not caching %s: result has no body mapping", key)
            return

        body = data["body"]
        if options.format:
            body = options.format(body)

        self._set_data_cache(body)
        self._set_request_cache(key, params_hash, body, data.get("headers"), options)
        logger.debug("Populated %s:%s", key, params_hash)

    def _set_data_cache(self, body: Mapping[str, Any]) -> None:
        for entity_type, value in body.items():
            if not isinstance(value, (Mapping, list, tuple)):
                continue
            self._get_or_create_entity_store(entity_type).put_all(value)

    def _set_request_cache(
        self,
        key: str,
        params_hash: str,
        body: Mapping[str, Any],
        headers: Any,
        options: FetchOptions,
    ) -> None:
        store = self._get_or_create_request_store(key, options.cache)
        store.set_metadata(params_hash, RecordedMetadata(headers))

        record = self._build_record(body)
        if record is None:
            logger.warning("Not caching %s:%s: body has non-entity fields", key, params_hash)
            return
        store.set_request(params_hash, record)

    def _build_record(self, body: Mapping[str, Any]) -> RequestRecord | None:
        refs: dict[str, Reference] = {}
        for entity_type, value in body.items():
            id_property = self.get_id_property(entity_type)
            if isinstance(value, Mapping):
                refs[entity_type] = Single(value.get(id_property))
            elif isinstance(value, (list, tuple)):
                refs[entity_type] = Many(
                    tuple(
                        item.get(id_property) if isinstance(item, Mapping) else None
                        for item in value
                    ),
                    sequence=tuple if isinstance(value, tuple) else list,
                )
            else:
                return None
        return RequestRecord(refs=refs)

    async def drain(self) -> None:
        """Wait until every scheduled population task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # Direct lookups

    def peek_head(self, key: OperationKey, params: Any = None) -> RecordedMetadata | None:
        """Return the recorded metadata for (key, params) without fetching."""
        store = self._request_stores.get(self._key_name(key))
        if store is None:
            return None
        return store.get_metadata(fingerprint(params))

    def peek_body(self, key: OperationKey, params: Any = None) -> dict[str, Any] | None:
        """Return the reconstructed body for (key, params) without fetching."""
        cached = self._reconstructor.reconstruct(self._key_name(key), fingerprint(params))
        return cached["body"] if cached is not None else None

    def reconstruct(self, key: OperationKey, params_hash: str) -> CompositeResponse | None:
        """Rebuild the response cached under an operation and fingerprint."""
        return self._reconstructor.reconstruct(self._key_name(key), params_hash)

    # Invalidation

    def reset_requests(
        self,
        key: OperationKey | None = None,
        params: Any = None,
        ids: Mapping[str, Any] | None = None,
    ) -> None:
        """Invalidate cached requests.

        Args:
            key: Operation key or fetch function. If None, every
                operation's request and metadata stores are dropped.
            params: If given, only this fingerprint's request record is
                invalidated; otherwise the operation's stores are cleared.
            ids: With params, overwrite the request record with these
                ``{type: id | [ids]}`` references instead of deleting it.
        """
        if key is None:
            self._request_stores.clear()
            return

        store = self._request_stores.get(self._key_name(key))
        if store is None:
            return

        if params is None:
            store.reset()
            return

        params_hash = fingerprint(params)
        if ids is not None:
            store.set_request(params_hash, RequestRecord.from_ids(ids))
            return

        store.invalidate(params_hash)

    def reset_data(self, entity_type: str | None = None, data: Any = None) -> None:
        """Clear entity stores, or merge data into one.

        Args:
            entity_type: Type to reset. If None, every entity store is dropped.
            data: Entity or entities to merge into the store. If None,
                the store is cleared.

        Raises:
            MissingCachePolicyError: If the store must be created and the
                type has no policy
        """
        if entity_type is None:
            self._entity_stores.clear()
            return

        store = self._get_or_create_entity_store(entity_type)
        store.reset(data)

    def delete_data(self, entity_type: str, data: Any) -> int:
        """Remove entities given as ids, entities or a sequence of either.

        Returns:
            Number of entities removed (0 if the type has no store)
        """
        store = self._entity_stores.get(entity_type)
        if store is None:
            return 0
        return store.delete(data)

    # Configuration lookups

    def get_id_property(self, entity_type: str) -> str:
        declared = self._data_types.get(entity_type)
        return declared.id_property if declared else self._default_id_property

    def get_data_cache_policy(self, entity_type: str) -> CachePolicy | None:
        declared = self._data_types.get(entity_type)
        if declared and declared.cache is not None:
            return declared.cache
        return self._default_data_cache

    # Store management

    def _key_name(self, key: OperationKey) -> str:
        return key if isinstance(key, str) else self.operation_key(key)

    def _create_entity_store(self, entity_type: str) -> EntityStore:
        policy = self.get_data_cache_policy(entity_type)
        if policy is None:
            raise MissingCachePolicyError(entity_type)
        store = EntityStore(
            entity_type,
            self._cache_factory(policy),
            id_property=self.get_id_property(entity_type),
        )
        self._entity_stores[entity_type] = store
        return store

    def _get_or_create_entity_store(self, entity_type: str) -> EntityStore:
        store = self._entity_stores.get(entity_type)
        return store if store is not None else self._create_entity_store(entity_type)

    def _get_or_create_request_store(self, key: str, policy: CachePolicy | None) -> RequestStore:
        store = self._request_stores.get(key)
        if store is not None:
            return store
        if policy is None:
            raise MissingCachePolicyError(key)
        store = RequestStore(key, self._cache_factory(policy), self._cache_factory(policy))
        self._request_stores[key] = store
        return store

    def entity_store(self, entity_type: str) -> EntityStore | None:
        """Get the store for an entity type, if it exists."""
        return self._entity_stores.get(entity_type)

    def request_store(self, key: OperationKey) -> RequestStore | None:
        """Get the request store for an operation, if it exists."""
        return self._request_stores.get(self._key_name(key))

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with entity counts per type, request counts per
            operation and the number of pending population tasks
        """
        return {
            "entities": {name: len(store) for name, store in self._entity_stores.items()},
            "requests": {name: len(store) for name, store in self._request_stores.items()},
            "pending_populations": len(self._pending),
        }

    @property
    def entity_stores(self) -> Mapping[str, EntityStore]:
        return MappingProxyType(self._entity_stores)

    @property
    def request_stores(self) -> Mapping[str, RequestStore]:
        return MappingProxyType(self._request_stores)
