"""Search use cases: per-type search execution and multi-type orchestration."""

from __future__ import annotations

import logging
import math
from collections.abc import Collection, Sequence

from objectsearch.application.dtos.search import SearchResult, SearchResults
from objectsearch.application.interfaces.queries import (
    HINT_PAGE_NUMBER,
    IQueryTranslator,
    IRequestFiltering,
    IRequestPagination,
    IRequestSorting,
    ISearchQueryFactory,
)
from objectsearch.application.interfaces.services import IMetadataCatalog
from objectsearch.application.services.object_registry import (
    EligibleObjects,
    ObjectRegistryResolver,
)
from objectsearch.application.services.predicate_builder import (
    build_search_predicate,
    tokenize,
)
from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.domain.exceptions import InvalidArgumentException
from objectsearch.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class ObjectSearchExecutor:
    """Runs the search query of one object type and returns its paginated result.

    Errors raised by the query layer or the request helpers are not caught.
    """

    def __init__(
        self,
        queries: ISearchQueryFactory,
        pagination: IRequestPagination,
        sorting: IRequestSorting,
        filtering: IRequestFiltering,
        translator: IQueryTranslator,
    ) -> None:
        self.queries = queries
        self.pagination = pagination
        self.sorting = sorting
        self.filtering = filtering
        self.translator = translator

    @traced("search.object")
    async def execute(
        self,
        metadata: ObjectTypeMetadata,
        words: Sequence[str],
        lock_page: bool,
    ) -> SearchResult:
        """Search metadata's collection for words.

        Without words nothing is queried: only the page size is resolved and
        an empty result is returned. Ad-hoc request filters apply only when
        lock_page is set (single object search).
        """
        query = self.queries.create_query(metadata)

        if not words:
            self.pagination.paginate(query, lock_page)
            return SearchResult(name=metadata.name, limit=query.max_results)

        predicate = build_search_predicate(metadata, words)
        query.add_predicate(predicate)
        self.pagination.paginate(query, lock_page)
        self.sorting.sort(query)
        if lock_page:
            self.filtering.filter(query)
        if metadata.translatable:
            query = self.translator.translate(query)

        total = await query.count()
        limit = query.max_results
        add_span_attributes(**{"search.object": metadata.name, "search.total": total})
        logger.debug(
            "Search %s on fields %s: %d match(es)",
            metadata.name,
            predicate.field_paths(),
            total,
        )
        if total == 0:
            return SearchResult(name=metadata.name, limit=limit)

        results = tuple(await query.fetch_page())
        page = int(query.get_hint(HINT_PAGE_NUMBER, 1))
        pages = math.ceil(total / limit) if limit else 1
        return SearchResult(
            name=metadata.name,
            results=results,
            page=page,
            limit=limit,
            pages=pages,
            total=total,
        )


class SearchService:
    """Keyword search across every eligible object type, or a selection of them."""

    def __init__(
        self,
        registry: ObjectRegistryResolver,
        catalog: IMetadataCatalog,
        executor: ObjectSearchExecutor,
    ) -> None:
        self.registry = registry
        self.catalog = catalog
        self.executor = executor

    @traced("search")
    async def search(
        self, query: str, object_names: Collection[str] = ()
    ) -> SearchResults:
        """Search query in the selected object types (all eligible ones when empty).

        Unknown or ineligible names are dropped. Selecting exactly one object
        locks pagination to the first page and enables request filters.
        """
        words = tokenize(query)
        lock_page = len(set(object_names)) == 1
        objects = await self._validate_objects(object_names)
        results = []
        for name, backing_class in objects.items():
            metadata = self.catalog.get(backing_class)
            results.append(await self.executor.execute(metadata, words, lock_page))
        return SearchResults(results)

    async def search_object(self, object_name: str, query: str) -> SearchResult:
        """Search query in a single object type.

        Raises:
            InvalidArgumentException: object_name is not an eligible object type.
        """
        results = await self.search(query, [object_name])
        result = results.get_object(object_name)
        if result is None:
            raise InvalidArgumentException(object_name)
        return result

    async def _validate_objects(self, object_names: Collection[str]) -> EligibleObjects:
        eligible = await self.registry.resolve_eligible_objects()
        if not object_names:
            return eligible
        return {name: eligible[name] for name in object_names if name in eligible}
