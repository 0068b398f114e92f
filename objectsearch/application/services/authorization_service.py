"""Authorization service: view checks of the current principal on object types."""

from __future__ import annotations

from collections.abc import Callable, Hashable

from objectsearch.application.interfaces.services import IMetadataCatalog
from objectsearch.shared.context import Principal, get_current_principal

PERMISSION_PREFIX = "perm:"


class AuthorizationService:
    """Centralized permission checking against the principal's permission codes.

    Codes have the form <object>:<action> (e.g. invoice:view); <object>:*
    and *:* grant every action. Permission keys passed to is_granted use the
    perm:<action> form and are resolved against the object name of the
    backing class.
    """

    def __init__(
        self,
        catalog: IMetadataCatalog,
        principal_provider: Callable[[], Principal | None] = get_current_principal,
    ) -> None:
        self.catalog = catalog
        self.principal_provider = principal_provider

    def get_permissions(self) -> frozenset[str]:
        """Return the permission codes of the current principal (lowercased)."""
        principal = self.principal_provider()
        if principal is None:
            return frozenset()
        return frozenset(code.lower() for code in principal.permissions)

    def check_permission(self, resource: str, action: str) -> bool:
        """Return True if the principal has resource:action or resource:* or *:*."""
        permissions = self.get_permissions()
        resource = resource.lower()
        code = f"{resource}:{action.lower()}"
        if code in permissions:
            return True
        if f"{resource}:*" in permissions or "*:*" in permissions:
            return True
        return False

    async def is_granted(self, permission: str, backing_class: type) -> bool:
        """Return True if the principal holds permission (perm:<action>) on backing_class.

        Classes unknown to the catalog are never granted.
        """
        action = permission.removeprefix(PERMISSION_PREFIX)
        try:
            resource = self.catalog.get(backing_class).name
        except KeyError:
            return False
        return self.check_permission(resource, action)

    def permission_key(self) -> Hashable:
        """Return the principal's permission codes; equal keys always get equal decisions."""
        return self.get_permissions()
