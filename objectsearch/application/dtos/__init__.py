"""Application DTOs (read-models independent of the ORM)."""

from objectsearch.application.dtos.search import SearchResult, SearchResults

__all__ = [
    "SearchResult",
    "SearchResults",
]
