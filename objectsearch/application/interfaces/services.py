"""Service interfaces (ports) for the application layer.

Protocols define contracts for the collaborators the search core relies on
(DIP): the metadata catalog, authorization, permission configuration and
organizational context. Their rule evaluation and storage are not the
search core's concern.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from objectsearch.domain.entities import ObjectTypeMetadata, PermissionConfig


# Metadata catalog interface
class IMetadataCatalog(Protocol):
    """Protocol for the catalog of object type metadata."""

    def all(self) -> Sequence[ObjectTypeMetadata]:
        """Return the metadata of every registered object type."""

    def get(self, backing_class: type) -> ObjectTypeMetadata:
        """Return the metadata registered for backing_class (KeyError if unknown)."""


# Authorization checker interface
class IAuthorizationChecker(Protocol):
    """Protocol for permission checks of the acting subject."""

    async def is_granted(self, permission: str, backing_class: type) -> bool:
        """Return True if the current subject holds permission on backing_class."""

    def permission_key(self) -> Hashable:
        """Return a key such that subjects with equal keys get equal decisions (scopes cached eligibility)."""


# Permission configuration interface
class IPermissionConfigProvider(Protocol):
    """Protocol for per-class permission configuration."""

    def has_config(self, backing_class: type) -> bool:
        """Return True if a permission config is declared for backing_class."""

    def get_config(self, backing_class: type) -> PermissionConfig:
        """Return the permission config of backing_class."""


# Organizational context interface
class IOrganizationalContext(Protocol):
    """Protocol for the organizational context of the current request."""

    def is_organization(self) -> bool:
        """Return True when the request acts in an organization space."""
