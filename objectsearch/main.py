"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
search catalog. No business logic here. See objectsearch.core.lifespan and
objectsearch.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
optionally clear get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from objectsearch.api.v1 import api_router
from objectsearch.application.services.object_registry import EligibleObjectCache
from objectsearch.core.config import get_settings
from objectsearch.core.exception_handlers import register_exception_handlers
from objectsearch.core.lifespan import create_lifespan
from objectsearch.core.limiter import limiter
from objectsearch.infrastructure.metadata import (
    MetadataRegistry,
    PermissionConfigRegistry,
)
from objectsearch.shared.telemetry.telemetry import TelemetryConfig, set_telemetry


def create_app(
    metadata_registry: MetadataRegistry | None = None,
    permission_configs: PermissionConfigRegistry | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Without an explicit registry, searchable models are imported from
    SEARCH_MODELS ("package.module:Model", comma separated).
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    if metadata_registry is None:
        metadata_registry = MetadataRegistry.from_paths(settings.search_model_paths())
    app.state.metadata_registry = metadata_registry
    app.state.permission_configs = permission_configs or PermissionConfigRegistry()
    app.state.eligibility_cache = EligibleObjectCache(
        maxsize=settings.search_eligibility_cache_size
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        set_telemetry(telemetry)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
