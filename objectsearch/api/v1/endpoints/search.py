"""Search API: keyword search across registered object types."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from objectsearch.api.v1.dependencies import get_metadata_registry, get_search_service
from objectsearch.application.dtos.search import SearchResult
from objectsearch.application.use_cases.search import SearchService
from objectsearch.core.limiter import limit_search
from objectsearch.infrastructure.metadata import MetadataRegistry
from objectsearch.infrastructure.search.serializer import serialize_item
from objectsearch.schemas.search import SearchResultResponse, SearchResultsResponse

router = APIRouter()


def _to_response(
    result: SearchResult, registry: MetadataRegistry
) -> SearchResultResponse:
    metadata = registry.get_by_name(result.name)
    return SearchResultResponse(
        name=result.name,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
        total=result.total,
        results=[serialize_item(metadata, item) for item in result.results]
        if metadata is not None
        else [],
    )


@router.get("", response_model=SearchResultsResponse)
@limit_search
async def search(
    request: Request,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    registry: Annotated[MetadataRegistry, Depends(get_metadata_registry)],
    q: Annotated[str, Query(max_length=500)] = "",
    objects: Annotated[
        list[str], Query(description="Object types to search; all when omitted")
    ] = [],
) -> SearchResultsResponse:
    """Search q in the selected object types (every eligible type when none is given)."""
    results = await search_svc.search(q, objects)
    return SearchResultsResponse(
        total=results.total,
        objects={r.name: _to_response(r, registry) for r in results},
    )


@router.get("/{object_name}", response_model=SearchResultResponse)
@limit_search
async def search_object(
    request: Request,
    object_name: str,
    search_svc: Annotated[SearchService, Depends(get_search_service)],
    registry: Annotated[MetadataRegistry, Depends(get_metadata_registry)],
    q: Annotated[str, Query(max_length=500)] = "",
) -> SearchResultResponse:
    """Search q in one object type; 400 INVALID_ARGUMENT when the type is not searchable."""
    result = await search_svc.search_object(object_name, q)
    return _to_response(result, registry)
