"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the request principal, the search request
parameters and the search use case. Routes depend only on these
dependencies, not on infrastructure directly.

Principal and search parameters are stored in context variables by async
dependencies, so they are visible to the request helpers of the same
request.
"""

from __future__ import annotations

import json
from typing import Annotated, Any

from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from objectsearch.application.services.authorization_service import (
    AuthorizationService,
)
from objectsearch.application.services.object_registry import (
    EligibleObjectCache,
    ObjectRegistryResolver,
)
from objectsearch.application.use_cases.search import (
    ObjectSearchExecutor,
    SearchService,
)
from objectsearch.core.config import get_settings
from objectsearch.core.search_context import SearchRequestParams, set_search_params
from objectsearch.domain.exceptions import AuthenticationException, ValidationException
from objectsearch.infrastructure.metadata import (
    MetadataRegistry,
    PermissionConfigRegistry,
)
from objectsearch.infrastructure.persistence.database import get_db
from objectsearch.infrastructure.search import (
    LocaleQueryTranslator,
    RequestFiltering,
    RequestPagination,
    RequestSorting,
    SqlAlchemyPredicateCompiler,
    SqlAlchemySearchQueryFactory,
)
from objectsearch.infrastructure.security.context import PrincipalOrganizationalContext
from objectsearch.infrastructure.security.jwt import decode_principal
from objectsearch.shared.context import Principal, set_current_principal

_http_bearer = HTTPBearer(auto_error=False)


def get_metadata_registry(request: Request) -> MetadataRegistry:
    """Object type catalog built at app creation."""
    return request.app.state.metadata_registry


def get_permission_configs(request: Request) -> PermissionConfigRegistry:
    return request.app.state.permission_configs


def get_eligibility_cache(request: Request) -> EligibleObjectCache:
    """Process-wide eligibility memo (one entry per principal and context)."""
    return request.app.state.eligibility_cache


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> Principal:
    """Return the principal of the JWT bearer token; raise 401 if missing or invalid."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        principal = decode_principal(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
    set_current_principal(principal)
    return principal


def _parse_sort(sort: str | None) -> tuple[str, ...]:
    if not sort:
        return ()
    return tuple(s.strip() for s in sort.split(",") if s.strip())


def _parse_filter(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        filters = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationException(f"filter is not valid JSON: {e.msg}", field="filter") from e
    if not isinstance(filters, dict):
        raise ValidationException("filter must be a JSON object", field="filter")
    return filters


async def get_search_request_params(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
    sort: Annotated[str | None, Query(description="e.g. name,-created_at")] = None,
    filter: Annotated[
        str | None, Query(description='JSON object, e.g. {"status": "paid"}')
    ] = None,
    accept_language: Annotated[str | None, Header()] = None,
) -> SearchRequestParams:
    """Parse paging, sorting, filtering and locale of the request into the search context."""
    locale = None
    if accept_language:
        locale = accept_language.split(",")[0].split(";")[0].strip() or None
    params = SearchRequestParams(
        page=page,
        limit=limit,
        sort=_parse_sort(sort),
        filters=_parse_filter(filter),
        locale=locale,
    )
    set_search_params(params)
    return params


async def get_search_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    registry: Annotated[MetadataRegistry, Depends(get_metadata_registry)],
    permission_configs: Annotated[
        PermissionConfigRegistry, Depends(get_permission_configs)
    ],
    cache: Annotated[EligibleObjectCache, Depends(get_eligibility_cache)],
    _principal: Annotated[Principal, Depends(get_current_principal)],
    _params: Annotated[SearchRequestParams, Depends(get_search_request_params)],
) -> SearchService:
    """Search use case wired with SQLAlchemy queries and request helpers."""
    settings = get_settings()
    resolver = ObjectRegistryResolver(
        catalog=registry,
        authorization=AuthorizationService(registry),
        permission_configs=permission_configs,
        organizational_context=PrincipalOrganizationalContext(),
        cache=cache,
        view_permission=settings.search_view_permission,
    )
    executor = ObjectSearchExecutor(
        queries=SqlAlchemySearchQueryFactory(
            db, SqlAlchemyPredicateCompiler(settings.search_unaccent_function)
        ),
        pagination=RequestPagination(
            default_limit=settings.search_default_limit,
            max_limit=settings.search_max_limit,
        ),
        sorting=RequestSorting(),
        filtering=RequestFiltering(),
        translator=LocaleQueryTranslator(default_locale=settings.default_locale),
    )
    return SearchService(registry=resolver, catalog=registry, executor=executor)
