"""Snapshot loader: read the four JSON snapshots and build the entity index.

Each snapshot is a JSON document with a top-level ``data`` array. Every entry
with a non-empty ``id`` becomes one record in its table (last write wins on
duplicate ids). Entries without a usable id are skipped, not reported.

The four reads run concurrently. Any read or parse failure fails the whole
load; nothing is returned for a partial load.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeVar

from pydantic import ValidationError

from metadata_health.schemas.records import AttributesRecord, SnapshotRecord, StatsRecord
from metadata_health.services.entity_index import EntityIndex
from metadata_health.services.snapshot_source import SnapshotSource

logger = logging.getLogger("metadata_health.dataset")

RecordT = TypeVar("RecordT", bound=SnapshotRecord)


class DatasetLoadError(Exception):
    """Raised when a snapshot cannot be read or parsed."""


@dataclass(frozen=True)
class SnapshotNames:
    providers_attributes: str = "providers_attributes.json"
    providers_stats: str = "providers_stats.json"
    clients_attributes: str = "clients_attributes.json"
    clients_stats: str = "clients_stats.json"

    @classmethod
    def from_settings(cls) -> "SnapshotNames":
        from metadata_health.config import settings
        return cls(
            providers_attributes=settings.providers_attributes_file,
            providers_stats=settings.providers_stats_file,
            clients_attributes=settings.clients_attributes_file,
            clients_stats=settings.clients_stats_file,
        )


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_snapshot(name: str, body: bytes, model: type[RecordT]) -> dict[str, RecordT]:
    """Parse one snapshot document into an id -> record table."""
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DatasetLoadError(f"Snapshot {name} is not valid JSON: {exc}") from exc

    entries = document.get("data") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        logger.warning("Snapshot %s has no 'data' array; table left empty", name)
        return {}

    table: dict[str, RecordT] = {}
    skipped = 0
    for entry in entries:
        if not isinstance(entry, dict):
            skipped += 1
            continue
        try:
            record = model.model_validate(entry)
        except ValidationError:
            skipped += 1
            continue
        table[record.id] = record

    if skipped:
        logger.debug("Snapshot %s: skipped %d malformed records", name, skipped)
    return table


async def _read(source: SnapshotSource, name: str) -> bytes:
    try:
        return await source.read(name)
    except (OSError, ValueError) as exc:
        raise DatasetLoadError(f"Could not read snapshot {name}: {exc}") from exc


async def load_snapshots(source: SnapshotSource, names: SnapshotNames | None = None) -> EntityIndex:
    """Load all four snapshots concurrently and return a fresh index.

    Raises DatasetLoadError if any snapshot fails to read or parse.
    """
    names = names or SnapshotNames()
    logger.info("Loading snapshots")

    bodies = await asyncio.gather(
        _read(source, names.providers_attributes),
        _read(source, names.providers_stats),
        _read(source, names.clients_attributes),
        _read(source, names.clients_stats),
    )
    providers_attributes, providers_stats, clients_attributes, clients_stats = bodies

    index = EntityIndex.build(
        providers_attributes=parse_snapshot(names.providers_attributes, providers_attributes, AttributesRecord),
        providers_stats=parse_snapshot(names.providers_stats, providers_stats, StatsRecord),
        clients_attributes=parse_snapshot(names.clients_attributes, clients_attributes, AttributesRecord),
        clients_stats=parse_snapshot(names.clients_stats, clients_stats, StatsRecord),
        timestamp=utc_timestamp(),
    )
    logger.info("Snapshots loaded at %s: %s", index.timestamp, index.counts())
    return index
