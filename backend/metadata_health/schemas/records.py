"""Typed snapshot records.

Only the ``id`` can reject a record: it must be a non-empty string. Everything
else in the snapshot entry is kept as-is, in source key order, and handed back
as a fresh copy when the record is serialized.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class EntityKind(str, Enum):
    provider = "provider"
    client = "client"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SnapshotRecord(BaseModel):
    id: str = Field(..., min_length=1)
    document: dict[str, Any]

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _wrap_entry(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {"id": data.get("id"), "document": data}
        return data

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()["document"]


class AttributesRecord(SnapshotRecord):
    """Descriptive metadata for a provider or client. Authoritative for existence."""

    @property
    def client_ids(self) -> list[str]:
        """Declared client ids, in order.

        A missing or non-list ``relationships.clients`` means no clients;
        entries that are not non-empty strings are ignored.
        """
        relationships = self.document.get("relationships")
        if not isinstance(relationships, dict):
            return []
        clients = relationships.get("clients")
        if not isinstance(clients, list):
            return []
        return [c for c in clients if isinstance(c, str) and c]


class StatsRecord(SnapshotRecord):
    """Statistics payload for a provider or client."""

    @property
    def has_stats(self) -> bool:
        return "stats" in self.document
