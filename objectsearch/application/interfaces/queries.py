"""Query interfaces (ports) for per-type search execution.

A single narrow query interface hides the storage technology: open a query
scoped to one object type, add a predicate, page it, count it, fetch the
current page. Request-driven helpers annotate the query with paging,
ordering, ad-hoc filters and locale from the ambient request.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from objectsearch.domain.entities import ObjectTypeMetadata
    from objectsearch.domain.value_objects import AnyOf

# Hint holding the resolved 1-based page number of a paginated query.
HINT_PAGE_NUMBER = "search.page_number"


class ISearchQuery(Protocol):
    """Query over one object type's collection."""

    metadata: ObjectTypeMetadata
    max_results: int | None
    first_result: int

    def add_predicate(self, predicate: AnyOf) -> None:
        """Restrict the query with a search predicate (AND with existing criteria)."""

    def get_hint(self, name: str, default: Any = None) -> Any:
        """Return a query hint set by a helper."""

    def set_hint(self, name: str, value: Any) -> None:
        """Attach a hint (e.g. resolved page number) to the query."""

    async def count(self) -> int:
        """Return the number of matching rows, ignoring paging."""

    async def fetch_page(self) -> Sequence[Any]:
        """Return the rows of the current page."""


class ISearchQueryFactory(Protocol):
    """Opens queries scoped to an object type."""

    def create_query(self, metadata: ObjectTypeMetadata) -> ISearchQuery:
        """Return a base (unfiltered) query over metadata.backing_class."""


class IRequestPagination(Protocol):
    """Applies page and limit from the current request."""

    def paginate(self, query: ISearchQuery, lock_page: bool = False) -> ISearchQuery:
        """Set max_results/first_result and the page hint; lock_page forces page 1."""


class IRequestSorting(Protocol):
    """Applies ordering from the current request."""

    def sort(self, query: ISearchQuery) -> ISearchQuery:
        """Order the query by the requested fields."""


class IRequestFiltering(Protocol):
    """Applies ad-hoc filters from the current request."""

    def filter(self, query: ISearchQuery) -> ISearchQuery:
        """Restrict the query by the requested field filters."""


class IQueryTranslator(Protocol):
    """Rewrites queries over translatable types for the request locale."""

    def translate(self, query: ISearchQuery) -> ISearchQuery:
        """Return the query rewritten for the current locale."""
