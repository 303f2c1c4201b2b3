"""Pydantic models shared across the search layers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CollectionInfo(BaseModel):
    """Collection metadata as reported by ``/search``; unknown keys are kept."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None


class IconifySearchResponse(BaseModel):
    icons: list[str] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    start: int = 0
    collections: dict[str, CollectionInfo] = Field(default_factory=dict)
    request: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def empty(cls, query: str = "", limit: int = 0) -> "IconifySearchResponse":
        return cls(limit=limit, request={"query": query} if query else {})


class IconGroup(BaseModel):
    prefix: str
    name: str
    icons: list[str]


__all__ = [
    "CollectionInfo",
    "IconGroup",
    "IconifySearchResponse",
]
