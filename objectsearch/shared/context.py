"""Request context management using contextvars.

Provides async-safe storage for the authenticated principal of the current
request: who is searching, in which tenant, with which permission codes,
and whether the request acts in an organization space.

Usage:
    set_current_principal(Principal(subject_id="u1", permissions=frozenset({"invoice:view"})))
    principal = get_current_principal()
"""

from contextvars import ContextVar
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Principal:
    """Immutable snapshot of the authenticated subject."""

    subject_id: str
    tenant_id: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    is_organization: bool = False


_current_principal: ContextVar[Principal | None] = ContextVar(
    "current_principal", default=None
)


def set_current_principal(principal: Principal | None) -> None:
    """Set the principal for this request.

    Call in dependency injection after authentication. Context is scoped to
    the current async task.
    """
    _current_principal.set(principal)


def get_current_principal() -> Principal | None:
    """Return the current principal, or None if not authenticated."""
    return _current_principal.get()
