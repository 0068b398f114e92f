"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (catalog, queries, request helpers).
"""

from objectsearch.application.dtos import SearchResult, SearchResults
from objectsearch.application.services import (
    AuthorizationService,
    EligibleObjectCache,
    ObjectRegistryResolver,
)
from objectsearch.application.use_cases import ObjectSearchExecutor, SearchService

__all__ = [
    "AuthorizationService",
    "EligibleObjectCache",
    "ObjectRegistryResolver",
    "ObjectSearchExecutor",
    "SearchResult",
    "SearchResults",
    "SearchService",
]
