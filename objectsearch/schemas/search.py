"""Search API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class SearchResultResponse(BaseModel):
    """Paginated hits of one object type."""

    name: str = Field(..., description="Object type name")
    page: int = Field(1, description="Current page (1-based)")
    limit: int | None = Field(None, description="Page size")
    pages: int = Field(1, description="Number of pages")
    total: int = Field(0, description="Matches before pagination")
    results: list[dict[str, Any]] = Field(default_factory=list)


class SearchResultsResponse(BaseModel):
    """Hits of every searched object type."""

    total: int = Field(0, description="Sum of the per-object totals")
    objects: dict[str, SearchResultResponse] = Field(default_factory=dict)
