"""Logging configuration: stdout handler, records stamped with the current trace id."""

import logging
import sys

from objectsearch.core.config import get_settings
from objectsearch.shared.telemetry.tracing import get_trace_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [trace=%(trace_id)s] %(message)s"


class TraceIdFilter(logging.Filter):
    """Adds trace_id to every record ("-" outside a span)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. SQL
    statement logging follows database_echo.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(TraceIdFilter())
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
