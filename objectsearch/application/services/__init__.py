"""Application services: authorization, eligibility and predicate building."""

from objectsearch.application.services.authorization_service import (
    AuthorizationService,
)
from objectsearch.application.services.object_registry import (
    EligibleObjectCache,
    ObjectRegistryResolver,
)
from objectsearch.application.services.predicate_builder import (
    build_search_predicate,
    tokenize,
)

__all__ = [
    "AuthorizationService",
    "EligibleObjectCache",
    "ObjectRegistryResolver",
    "build_search_predicate",
    "tokenize",
]
