"""SQLAlchemy implementation of the search query ports."""

from objectsearch.infrastructure.search.predicate_compiler import (
    SqlAlchemyPredicateCompiler,
)
from objectsearch.infrastructure.search.query import (
    SqlAlchemySearchQuery,
    SqlAlchemySearchQueryFactory,
)
from objectsearch.infrastructure.search.request_query import (
    RequestFiltering,
    RequestPagination,
    RequestSorting,
)
from objectsearch.infrastructure.search.translation import LocaleQueryTranslator

__all__ = [
    "LocaleQueryTranslator",
    "RequestFiltering",
    "RequestPagination",
    "RequestSorting",
    "SqlAlchemyPredicateCompiler",
    "SqlAlchemySearchQuery",
    "SqlAlchemySearchQueryFactory",
]
