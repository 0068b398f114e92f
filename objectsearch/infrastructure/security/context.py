"""Organizational context backed by the request principal (implements IOrganizationalContext)."""

from collections.abc import Callable

from objectsearch.shared.context import Principal, get_current_principal


class PrincipalOrganizationalContext:
    """Reports an organization context when the current principal acts for an organization."""

    def __init__(
        self,
        principal_provider: Callable[[], Principal | None] = get_current_principal,
    ) -> None:
        self.principal_provider = principal_provider

    def is_organization(self) -> bool:
        principal = self.principal_provider()
        return principal is not None and principal.is_organization
