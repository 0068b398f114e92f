"""Pytest configuration and fixtures for objectsearch.

Integration and API tests run against an in-memory SQLite database
(aiosqlite) with a Python "unaccent" function registered on each
connection, so diacritic folding behaves like PostgreSQL's unaccent.
"""

import unicodedata
from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from objectsearch.application.services.authorization_service import (
    AuthorizationService,
)
from objectsearch.application.services.object_registry import (
    EligibleObjectCache,
    ObjectRegistryResolver,
)
from objectsearch.application.use_cases.search import (
    ObjectSearchExecutor,
    SearchService,
)
from objectsearch.core.config import get_settings
from objectsearch.core.search_context import SearchRequestParams
from objectsearch.domain.entities import PermissionConfig
from objectsearch.infrastructure.metadata import (
    MetadataRegistry,
    PermissionConfigRegistry,
)
from objectsearch.infrastructure.persistence.database import Base, get_db
from objectsearch.infrastructure.search import (
    LocaleQueryTranslator,
    RequestFiltering,
    RequestPagination,
    RequestSorting,
    SqlAlchemyPredicateCompiler,
    SqlAlchemySearchQueryFactory,
)
from objectsearch.infrastructure.security.context import PrincipalOrganizationalContext
from objectsearch.shared.context import Principal
from tests.models import SEARCHABLE_MODELS, Invoice, InvoiceLine

TEST_SECRET_KEY = "test-secret-key-for-objectsearch"

ADMIN = Principal(subject_id="admin", tenant_id="t1", permissions=frozenset({"*:*"}))


def _unaccent(value: str | None) -> str | None:
    """Python stand-in for PostgreSQL unaccent()."""
    if value is None:
        return None
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch):
    """Deterministic settings for every test (secret key, limits)."""
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("SEARCH_DEFAULT_LIMIT", "20")
    monkeypatch.setenv("SEARCH_MAX_LIMIT", "100")
    monkeypatch.setenv("SEARCH_MODELS", "")
    monkeypatch.setenv("SEARCH_RATE_LIMIT", "1000/minute")
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine():
    """In-memory SQLite engine with the test schema and unaccent()."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _register_functions(dbapi_connection, connection_record) -> None:
        dbapi_connection.create_function("unaccent", 1, _unaccent)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine) -> AsyncSession:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def registry() -> MetadataRegistry:
    return MetadataRegistry.from_models(SEARCHABLE_MODELS)


@pytest.fixture
def permission_configs() -> PermissionConfigRegistry:
    return PermissionConfigRegistry(
        [
            PermissionConfig(Invoice),
            PermissionConfig(InvoiceLine, master=Invoice),
        ]
    )


@pytest.fixture
def build_search_service(
    db_session: AsyncSession,
    registry: MetadataRegistry,
    permission_configs: PermissionConfigRegistry,
) -> Callable[..., SearchService]:
    """Factory wiring a SearchService on the SQLite session with explicit principal and params."""

    def _build(
        principal: Principal | None = ADMIN,
        params: SearchRequestParams | None = None,
    ) -> SearchService:
        params = params or SearchRequestParams()
        resolver = ObjectRegistryResolver(
            catalog=registry,
            authorization=AuthorizationService(
                registry, principal_provider=lambda: principal
            ),
            permission_configs=permission_configs,
            organizational_context=PrincipalOrganizationalContext(lambda: principal),
            cache=EligibleObjectCache(),
        )
        executor = ObjectSearchExecutor(
            queries=SqlAlchemySearchQueryFactory(
                db_session, SqlAlchemyPredicateCompiler("unaccent")
            ),
            pagination=RequestPagination(20, 100, params_provider=lambda: params),
            sorting=RequestSorting(params_provider=lambda: params),
            filtering=RequestFiltering(params_provider=lambda: params),
            translator=LocaleQueryTranslator("en", params_provider=lambda: params),
        )
        return SearchService(registry=resolver, catalog=registry, executor=executor)

    return _build


@pytest.fixture
async def client(
    db_session: AsyncSession,
    registry: MetadataRegistry,
    permission_configs: PermissionConfigRegistry,
) -> AsyncClient:
    """Async HTTP client against a FastAPI app wired to the SQLite session."""
    from objectsearch.main import create_app

    app = create_app(registry, permission_configs)

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
