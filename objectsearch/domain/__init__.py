"""Domain layer: metadata entities, predicate value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from objectsearch.domain.entities import (
    FieldMetadata,
    ObjectTypeMetadata,
    PermissionConfig,
)
from objectsearch.domain.enums import MetadataContext
from objectsearch.domain.exceptions import (
    AuthenticationException,
    InvalidArgumentException,
    ObjectSearchException,
    SqlNotConfiguredException,
    ValidationException,
)
from objectsearch.domain.value_objects import AllOf, AnyOf, Contains

__all__ = [
    # Entities
    "FieldMetadata",
    "ObjectTypeMetadata",
    "PermissionConfig",
    # Enums
    "MetadataContext",
    # Exceptions
    "AuthenticationException",
    "InvalidArgumentException",
    "ObjectSearchException",
    "SqlNotConfiguredException",
    "ValidationException",
    # Value objects
    "AllOf",
    "AnyOf",
    "Contains",
]
