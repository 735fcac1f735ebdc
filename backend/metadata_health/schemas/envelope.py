from typing import Any

from pydantic import BaseModel


class ListMeta(BaseModel):
    total: int
    timestamp: str


class EntityResponse(BaseModel):
    data: dict[str, Any]


class EntityListResponse(BaseModel):
    data: list[dict[str, Any]]


class ListingResponse(BaseModel):
    data: list[dict[str, Any]]
    meta: ListMeta
