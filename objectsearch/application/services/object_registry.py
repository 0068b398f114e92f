"""Object registry resolver: which object types may be searched.

Eligibility is computed from the metadata catalog, the acting subject's
view permission, the organizational context and the permission
configuration, then memoized. The memo is only invalidated by reset().
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable, Mapping
from types import MappingProxyType

from cachetools import LRUCache

from objectsearch.application.interfaces.services import (
    IAuthorizationChecker,
    IMetadataCatalog,
    IOrganizationalContext,
    IPermissionConfigProvider,
)
from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.domain.enums import MetadataContext

logger = logging.getLogger(__name__)

EligibleObjects = Mapping[str, type]


class EligibleObjectCache:
    """Compute-once cache of eligible object sets, one entry per scope key.

    Populated entries are read without locking; the first computation of a
    key runs under an asyncio.Lock so concurrent first callers share one
    computation. No TTL: entries live until reset(), or until evicted as
    least recently used once maxsize keys are held.
    """

    def __init__(self, maxsize: int = 1024) -> None:
        self._entries: LRUCache[Hashable, EligibleObjects] = LRUCache(maxsize=maxsize)
        self._lock = asyncio.Lock()

    async def get_or_compute(
        self,
        key: Hashable,
        compute: Callable[[], Awaitable[Mapping[str, type]]],
    ) -> EligibleObjects:
        """Return the entry for key, computing it at most once."""
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = MappingProxyType(dict(await compute()))
                self._entries[key] = entry
            return entry

    def reset(self) -> None:
        """Drop every memoized entry."""
        if self._entries:
            logger.info("Eligible object cache reset (%d entries)", len(self._entries))
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ObjectRegistryResolver:
    """Resolves the object types the current subject may search.

    A type is eligible when it is public and searchable, available in the
    current context (organization or user), granted for viewing, and not a
    sub-resource (no permission master).
    """

    def __init__(
        self,
        catalog: IMetadataCatalog,
        authorization: IAuthorizationChecker,
        permission_configs: IPermissionConfigProvider,
        organizational_context: IOrganizationalContext | None = None,
        cache: EligibleObjectCache | None = None,
        view_permission: str = "perm:view",
    ) -> None:
        self.catalog = catalog
        self.authorization = authorization
        self.permission_configs = permission_configs
        self.organizational_context = organizational_context
        self.cache = cache if cache is not None else EligibleObjectCache()
        self.view_permission = view_permission

    async def resolve_eligible_objects(self) -> EligibleObjects:
        """Return object name -> backing class for every eligible type (memoized)."""
        key = (self.authorization.permission_key(), self._is_organization())
        return await self.cache.get_or_compute(key, self._compute_eligible_objects)

    def reset(self) -> None:
        """Invalidate memoized eligibility (e.g. after catalog or permission changes)."""
        self.cache.reset()

    async def _compute_eligible_objects(self) -> dict[str, type]:
        objects: dict[str, type] = {}
        for metadata in self.catalog.all():
            if not (metadata.public and metadata.searchable):
                continue
            if not self._is_valid_context(metadata):
                continue
            if not await self.authorization.is_granted(
                self.view_permission, metadata.backing_class
            ):
                continue
            if self._has_master(metadata.backing_class):
                continue
            objects[metadata.name] = metadata.backing_class
        logger.debug("Eligible object types computed: %s", sorted(objects))
        return objects

    def _is_organization(self) -> bool:
        return (
            self.organizational_context is not None
            and self.organizational_context.is_organization()
        )

    def _is_valid_context(self, metadata: ObjectTypeMetadata) -> bool:
        if self._is_organization():
            return metadata.is_available_in(MetadataContext.ORGANIZATION)
        return metadata.is_available_in(MetadataContext.USER)

    def _has_master(self, backing_class: type) -> bool:
        if not self.permission_configs.has_config(backing_class):
            return False
        return self.permission_configs.get_config(backing_class).master is not None
