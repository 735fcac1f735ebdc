"""In-memory entity index: the four snapshot tables keyed by entity id."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from metadata_health.schemas.records import AttributesRecord, EntityKind, StatsRecord


@dataclass(frozen=True)
class EntityIndex:
    """Read-only tables built by a single successful load."""

    providers_attributes: Mapping[str, AttributesRecord]
    providers_stats: Mapping[str, StatsRecord]
    clients_attributes: Mapping[str, AttributesRecord]
    clients_stats: Mapping[str, StatsRecord]
    timestamp: str

    @classmethod
    def build(
        cls,
        *,
        providers_attributes: dict[str, AttributesRecord],
        providers_stats: dict[str, StatsRecord],
        clients_attributes: dict[str, AttributesRecord],
        clients_stats: dict[str, StatsRecord],
        timestamp: str,
    ) -> "EntityIndex":
        return cls(
            providers_attributes=MappingProxyType(dict(providers_attributes)),
            providers_stats=MappingProxyType(dict(providers_stats)),
            clients_attributes=MappingProxyType(dict(clients_attributes)),
            clients_stats=MappingProxyType(dict(clients_stats)),
            timestamp=timestamp,
        )

    def attributes(self, kind: EntityKind) -> Mapping[str, AttributesRecord]:
        if kind is EntityKind.provider:
            return self.providers_attributes
        return self.clients_attributes

    def stats(self, kind: EntityKind) -> Mapping[str, StatsRecord]:
        if kind is EntityKind.provider:
            return self.providers_stats
        return self.clients_stats

    def counts(self) -> dict[str, int]:
        return {
            "providers_attributes": len(self.providers_attributes),
            "providers_stats": len(self.providers_stats),
            "clients_attributes": len(self.clients_attributes),
            "clients_stats": len(self.clients_stats),
        }
