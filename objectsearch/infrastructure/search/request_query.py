"""Request-driven query helpers: pagination, sorting and filtering.

They read the current SearchRequestParams (see core.search_context) and
annotate a SqlAlchemySearchQuery. Only public fields may be sorted or
filtered on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from objectsearch.application.interfaces.queries import HINT_PAGE_NUMBER
from objectsearch.core.search_context import SearchRequestParams, get_search_params
from objectsearch.domain.exceptions import ValidationException
from objectsearch.infrastructure.search.query import SqlAlchemySearchQuery

logger = logging.getLogger(__name__)

ParamsProvider = Callable[[], SearchRequestParams]


class RequestPagination:
    """Sets page size and offset from the request.

    limit defaults to default_limit and is capped at max_limit. With
    lock_page the requested page number is ignored and page 1 is used.
    """

    def __init__(
        self,
        default_limit: int = 20,
        max_limit: int = 100,
        params_provider: ParamsProvider = get_search_params,
    ) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.params_provider = params_provider

    def paginate(
        self, query: SqlAlchemySearchQuery, lock_page: bool = False
    ) -> SqlAlchemySearchQuery:
        params = self.params_provider()
        limit = self.default_limit if params.limit is None else params.limit
        if limit < 1:
            raise ValidationException("limit must be a positive integer", field="limit")
        if params.page < 1:
            raise ValidationException("page must be a positive integer", field="page")
        limit = min(limit, self.max_limit)
        page = 1 if lock_page else params.page

        query.max_results = limit
        query.first_result = (page - 1) * limit
        query.set_hint(HINT_PAGE_NUMBER, page)
        return query


class RequestSorting:
    """Orders the query by the requested fields ("name" ascending, "-name" descending).

    The same sort applies to every searched type, so fields a type does not
    expose are skipped rather than rejected.
    """

    def __init__(self, params_provider: ParamsProvider = get_search_params) -> None:
        self.params_provider = params_provider

    def sort(self, query: SqlAlchemySearchQuery) -> SqlAlchemySearchQuery:
        for entry in self.params_provider().sort:
            field = entry.lstrip("+-")
            if not query.order_by_field(field, descending=entry.startswith("-")):
                logger.debug("Sort field '%s' skipped for %s", field, query.metadata.name)
        return query


class RequestFiltering:
    """Restricts the query by field equality filters from the request.

    A list value matches any of its items; None matches NULL.

    Raises:
        ValidationException: a filter names a field the type does not expose.
    """

    def __init__(self, params_provider: ParamsProvider = get_search_params) -> None:
        self.params_provider = params_provider

    def filter(self, query: SqlAlchemySearchQuery) -> SqlAlchemySearchQuery:
        for field, value in self.params_provider().filters.items():
            column = query.public_column(field)
            if column is None:
                raise ValidationException(
                    f"Unknown filter field '{field}' for {query.metadata.name}",
                    field=field,
                )
            if isinstance(value, list):
                query.where(column.in_(value))
            elif value is None:
                query.where(column.is_(None))
            else:
                query.where(column == value)
        return query
