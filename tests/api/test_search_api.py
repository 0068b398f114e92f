"""API tests for /api/v1/search (JWT auth, serialization, error mapping)."""

import json

import pytest
from httpx import AsyncClient

from objectsearch.infrastructure.security.jwt import create_access_token
from objectsearch.shared.context import Principal
from tests.models import Customer, Invoice, Product, ProductTranslation


def _auth(*permissions: str) -> dict[str, str]:
    principal = Principal(
        subject_id="u1",
        tenant_id="t1",
        permissions=frozenset(permissions or ("*:*",)),
    )
    token = create_access_token(principal)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def seeded(db_session) -> None:
    db_session.add_all(
        [
            Invoice(number="WIDGET-2024", internal_ref="REF-1", status="paid"),
            Invoice(number="WIDGET-2025", status="draft"),
            Customer(name="Widget Corp", city="Lyon"),
            Customer(name="Acme"),
            Product(
                label="Widget",
                translations=[ProductTranslation(locale="fr", label="Bidule")],
            ),
        ]
    )
    await db_session.commit()
    db_session.expunge_all()


async def test_search_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/search", params={"q": "widget"})

    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"
    assert response.headers["www-authenticate"] == "Bearer"


async def test_search_rejects_invalid_token(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "widget"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401


async def test_search_all_objects(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "widget"}, headers=_auth()
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    assert set(data["objects"]) == {"invoice", "customer", "audit_entry", "product"}
    invoice = data["objects"]["invoice"]
    assert (invoice["total"], invoice["page"], invoice["pages"], invoice["limit"]) == (
        2,
        1,
        1,
        20,
    )
    assert "internal_ref" not in invoice["results"][0]
    assert invoice["results"][0]["number"] == "WIDGET-2024"
    assert data["objects"]["customer"]["results"][0] == {
        "id": 1,
        "name": "Widget Corp",
        "city": "Lyon",
    }


async def test_search_selected_objects(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search",
        params=[("q", "widget"), ("objects", "customer"), ("objects", "ghost")],
        headers=_auth(),
    )

    assert response.status_code == 200
    data = response.json()
    assert list(data["objects"]) == ["customer"]
    assert data["total"] == 1


async def test_search_respects_permissions(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search",
        params={"q": "widget"},
        headers=_auth("invoice:view"),
    )

    assert response.status_code == 200
    assert list(response.json()["objects"]) == ["invoice"]


async def test_search_object_with_filter(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/invoice",
        params={"q": "widget", "filter": json.dumps({"status": "paid"})},
        headers=_auth(),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "invoice"
    assert data["total"] == 1
    assert data["results"][0]["status"] == "paid"


async def test_search_object_unknown_name(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/search/Ghost", params={"q": "widget"}, headers=_auth()
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_ARGUMENT"
    assert body["message"] == 'The "Ghost" object doesn\'t exist'
    assert body["details"] == {"object": "Ghost"}


async def test_malformed_filter_is_rejected(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/search/invoice",
        params={"q": "widget", "filter": "{not json"},
        headers=_auth(),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_invalid_page_is_rejected(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/search", params={"q": "widget", "page": 0}, headers=_auth()
    )

    assert response.status_code == 422


async def test_accept_language_selects_translation(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/product",
        params={"q": "bidule"},
        headers={**_auth(), "Accept-Language": "fr;q=0.9, en"},
    )

    assert response.status_code == 200
    assert response.json()["results"][0]["label"] == "Bidule"


async def test_default_locale_keeps_base_values(client: AsyncClient, seeded) -> None:
    response = await client.get(
        "/api/v1/search/product", params={"q": "widget"}, headers=_auth()
    )

    assert response.status_code == 200
    assert response.json()["results"][0]["label"] == "Widget"
