"""Domain entities (metadata of searchable object types)."""

from objectsearch.domain.entities.object_metadata import (
    FieldMetadata,
    ObjectTypeMetadata,
    PermissionConfig,
)

__all__ = [
    "FieldMetadata",
    "ObjectTypeMetadata",
    "PermissionConfig",
]
