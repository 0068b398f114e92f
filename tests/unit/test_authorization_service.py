"""Tests for AuthorizationService permission checks."""

from objectsearch.application.services.authorization_service import (
    AuthorizationService,
)
from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.infrastructure.metadata import MetadataRegistry
from objectsearch.shared.context import Principal


class Invoice:
    pass


class Unregistered:
    pass


def _service(*permissions: str, principal: bool = True) -> AuthorizationService:
    catalog = MetadataRegistry([ObjectTypeMetadata(name="invoice", backing_class=Invoice)])
    current = (
        Principal(subject_id="u1", tenant_id="t1", permissions=frozenset(permissions))
        if principal
        else None
    )
    return AuthorizationService(catalog, principal_provider=lambda: current)


def test_check_permission_exact_and_wildcards() -> None:
    assert _service("invoice:view").check_permission("invoice", "view")
    assert _service("Invoice:VIEW").check_permission("invoice", "view")
    assert _service("invoice:*").check_permission("invoice", "view")
    assert _service("*:*").check_permission("invoice", "view")
    assert not _service("invoice:edit").check_permission("invoice", "view")
    assert not _service("customer:*").check_permission("invoice", "view")


async def test_is_granted_resolves_object_name_of_class() -> None:
    service = _service("invoice:view")

    assert await service.is_granted("perm:view", Invoice)
    assert not await service.is_granted("perm:edit", Invoice)


async def test_unregistered_class_is_never_granted() -> None:
    assert not await _service("*:*").is_granted("perm:view", Unregistered)


async def test_anonymous_principal_has_no_permissions() -> None:
    service = _service(principal=False)

    assert service.get_permissions() == frozenset()
    assert not await service.is_granted("perm:view", Invoice)
    assert service.permission_key() == frozenset()


def test_permission_key_ignores_subject_and_case() -> None:
    """Principals with the same permission codes get the same key."""
    catalog = MetadataRegistry([ObjectTypeMetadata(name="invoice", backing_class=Invoice)])
    other = Principal(subject_id="u2", tenant_id="t2", permissions=frozenset({"INVOICE:view"}))

    key = _service("invoice:view").permission_key()
    other_key = AuthorizationService(catalog, principal_provider=lambda: other).permission_key()

    assert key == frozenset({"invoice:view"})
    assert other_key == key
