"""Merge engine: combine an entity's attributes with its optional stats payload.

The attributes record is the only existence check. Only the ``stats`` field
of a stats record is surfaced; stored records are never modified.
"""

from typing import Any

from metadata_health.schemas.records import EntityKind
from metadata_health.services.entity_index import EntityIndex


def merge_entity(index: EntityIndex, kind: EntityKind, identifier: str) -> dict[str, Any] | None:
    """Return a new composite record for the entity, or None if it has no attributes."""
    attributes = index.attributes(kind).get(identifier)
    if attributes is None:
        return None

    result = attributes.to_dict()
    stats = index.stats(kind).get(identifier)
    if stats is not None and stats.has_stats:
        result["stats"] = stats.to_dict()["stats"]
    return result


def merge_all(index: EntityIndex, kind: EntityKind) -> list[dict[str, Any]]:
    """Merge every entity of a kind, in table order."""
    return [merge_entity(index, kind, identifier) for identifier in index.attributes(kind)]
