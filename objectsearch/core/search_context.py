"""Search request context.

The HTTP layer stores the paging, sorting, filtering and locale parameters
of the current request in this context variable; the request-driven query
helpers (pagination, sorting, filtering, translation) read them back so the
search use case never touches the request object.
"""

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SearchRequestParams:
    """Query parameters of the current search request.

    limit None means "use search_default_limit"; sort entries are field
    names, prefixed with "-" for descending order.
    """

    page: int = 1
    limit: int | None = None
    sort: tuple[str, ...] = ()
    filters: dict[str, Any] = field(default_factory=dict)
    locale: str | None = None


# Parameters of the current request (set by the search dependency, read by query helpers).
current_search_params: ContextVar[SearchRequestParams | None] = ContextVar(
    "current_search_params", default=None
)


def set_search_params(params: SearchRequestParams | None) -> None:
    """Set the search parameters for this context (e.g. request)."""
    current_search_params.set(params)


def get_search_params() -> SearchRequestParams:
    """Return the current search parameters, or defaults when none are set."""
    return current_search_params.get() or SearchRequestParams()
