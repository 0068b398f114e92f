"""Application lifespan: startup and shutdown.

Startup configures logging and, when tracing is on, instruments the SQL
engine used by the per-type queries. Shutdown flushes spans and disposes
the engine. Tracer provider and FastAPI instrumentation are installed in
create_app(), before the app starts serving.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from objectsearch.core.config import get_settings
from objectsearch.infrastructure.persistence import database
from objectsearch.shared.telemetry.logging import setup_logging
from objectsearch.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown."""
    setup_logging()
    telemetry = get_telemetry()
    if telemetry is not None:
        database._ensure_engine()
        if database.engine is not None:
            telemetry.instrument_sqlalchemy(database.engine)

    logger.info(
        "Search catalog loaded: %d object type(s), database %s",
        len(app.state.metadata_registry),
        "configured" if get_settings().database_url else "not configured",
    )

    yield

    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)
    await database.dispose_engine()
