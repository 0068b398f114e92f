"""Application use cases."""

from objectsearch.application.use_cases.search import ObjectSearchExecutor, SearchService

__all__ = [
    "ObjectSearchExecutor",
    "SearchService",
]
