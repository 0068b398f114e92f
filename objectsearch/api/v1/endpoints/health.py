"""Health check endpoint. No authentication; used by liveness checks."""

from typing import Annotated

from fastapi import APIRouter, Depends

from objectsearch.api.v1.dependencies import get_metadata_registry
from objectsearch.infrastructure.metadata import MetadataRegistry
from objectsearch.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    registry: Annotated[MetadataRegistry, Depends(get_metadata_registry)],
) -> HealthResponse:
    """Return ok status and the number of registered object types."""
    return HealthResponse(object_types=len(registry))
