"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and the search routes use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from objectsearch.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def search_rate_limit() -> str:
    """Rate limit string for search endpoints (read from settings on each request)."""
    return get_settings().search_rate_limit


limit_search = limiter.limit(search_rate_limit)
