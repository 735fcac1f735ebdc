"""Dataset service: the query operations the API exposes.

Owns the lazily loaded entity index. The first operation triggers the load;
concurrent first callers wait on the same in-flight load. A failed load
leaves the service not ready, and the next operation tries again.

Missing entities are returned as NotFound values. DatasetLoadError is the
only exception operations raise.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from metadata_health.schemas.records import EntityKind
from metadata_health.services.entity_index import EntityIndex
from metadata_health.services.merge_engine import merge_all, merge_entity
from metadata_health.services.relationship_resolver import resolve_provider_clients
from metadata_health.services.snapshot_loader import DatasetLoadError, SnapshotNames, load_snapshots
from metadata_health.services.snapshot_source import SnapshotSource, get_snapshot_source

logger = logging.getLogger("metadata_health.dataset")


@dataclass(frozen=True)
class NotFound:
    kind: EntityKind
    identifier: str
    detail: str


@dataclass(frozen=True)
class Listing:
    data: list[dict[str, Any]]
    timestamp: str

    @property
    def total(self) -> int:
        return len(self.data)


class DatasetService:
    def __init__(self, source: SnapshotSource, names: SnapshotNames | None = None):
        self._source = source
        self._names = names or SnapshotNames()
        self._index: EntityIndex | None = None
        self._lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    @property
    def loaded_at(self) -> str | None:
        return self._index.timestamp if self._index is not None else None

    async def ensure_loaded(self) -> EntityIndex:
        """Return the index, loading it first if needed. Raises DatasetLoadError."""
        if self._index is not None:
            return self._index
        async with self._lock:
            if self._index is None:
                try:
                    self._index = await load_snapshots(self._source, self._names)
                except DatasetLoadError:
                    logger.exception("Failed to load snapshots")
                    raise
        return self._index

    # --- Listings ---

    async def list_provider_attributes(self) -> Listing:
        return await self._list_attributes(EntityKind.provider)

    async def list_client_attributes(self) -> Listing:
        return await self._list_attributes(EntityKind.client)

    async def list_providers(self) -> Listing:
        index = await self.ensure_loaded()
        return Listing(data=merge_all(index, EntityKind.provider), timestamp=index.timestamp)

    async def list_clients(self) -> Listing:
        index = await self.ensure_loaded()
        return Listing(data=merge_all(index, EntityKind.client), timestamp=index.timestamp)

    # --- Single entities ---

    async def get_provider(self, provider_id: str) -> dict[str, Any] | NotFound:
        return await self._get_merged(EntityKind.provider, provider_id)

    async def get_client(self, client_id: str) -> dict[str, Any] | NotFound:
        return await self._get_merged(EntityKind.client, client_id)

    async def get_provider_attributes(self, provider_id: str) -> dict[str, Any] | NotFound:
        return await self._get_attributes(EntityKind.provider, provider_id)

    async def get_client_attributes(self, client_id: str) -> dict[str, Any] | NotFound:
        return await self._get_attributes(EntityKind.client, client_id)

    async def get_provider_stats(self, provider_id: str) -> dict[str, Any] | NotFound:
        return await self._get_stats(EntityKind.provider, provider_id)

    async def get_client_stats(self, client_id: str) -> dict[str, Any] | NotFound:
        return await self._get_stats(EntityKind.client, client_id)

    async def get_provider_clients(self, provider_id: str) -> list[dict[str, Any]] | NotFound:
        """Client attribute records for a provider. An empty result is reported as NotFound."""
        index = await self.ensure_loaded()
        if provider_id not in index.providers_attributes:
            return _not_found(EntityKind.provider, provider_id, "Provider {id} not found")

        clients = resolve_provider_clients(index, provider_id)
        if not clients:
            return _not_found(EntityKind.provider, provider_id, "No clients found for provider {id}")
        return clients

    # --- Internals ---

    async def _list_attributes(self, kind: EntityKind) -> Listing:
        index = await self.ensure_loaded()
        data = [record.to_dict() for record in index.attributes(kind).values()]
        return Listing(data=data, timestamp=index.timestamp)

    async def _get_merged(self, kind: EntityKind, identifier: str) -> dict[str, Any] | NotFound:
        index = await self.ensure_loaded()
        merged = merge_entity(index, kind, identifier)
        if merged is None:
            return _not_found(kind, identifier, "{kind} {id} not found")
        return merged

    async def _get_attributes(self, kind: EntityKind, identifier: str) -> dict[str, Any] | NotFound:
        index = await self.ensure_loaded()
        record = index.attributes(kind).get(identifier)
        if record is None:
            return _not_found(kind, identifier, "{kind} {id} attributes not found")
        return record.to_dict()

    async def _get_stats(self, kind: EntityKind, identifier: str) -> dict[str, Any] | NotFound:
        index = await self.ensure_loaded()
        record = index.stats(kind).get(identifier)
        if record is None:
            return _not_found(
                kind,
                identifier,
                "{kind} {id} stats not found. Stats may not be available for this {noun}.",
            )
        return record.to_dict()


def _not_found(kind: EntityKind, identifier: str, template: str) -> NotFound:
    detail = template.format(kind=kind.label, id=identifier, noun=kind.value)
    return NotFound(kind=kind, identifier=identifier, detail=detail)


# Module-level singleton, replaceable in tests
_dataset: DatasetService | None = None


def get_dataset() -> DatasetService:
    """Get the process-wide dataset service."""
    global _dataset
    if _dataset is None:
        _dataset = DatasetService(get_snapshot_source(), SnapshotNames.from_settings())
    return _dataset


def set_dataset(dataset: DatasetService | None) -> None:
    """Set the dataset service (used for testing)."""
    global _dataset
    _dataset = dataset
