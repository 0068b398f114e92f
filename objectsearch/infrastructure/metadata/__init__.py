"""Metadata catalog and permission configuration adapters."""

from objectsearch.infrastructure.metadata.permission_config import (
    PermissionConfigRegistry,
)
from objectsearch.infrastructure.metadata.registry import (
    MetadataRegistry,
    metadata_from_model,
)

__all__ = [
    "MetadataRegistry",
    "PermissionConfigRegistry",
    "metadata_from_model",
]
