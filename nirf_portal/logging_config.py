"""
Logging setup shared by the API and the scripts.

Calculators log through structlog (key/value events such as
"tlr_calculated"); routers and helpers use stdlib logging. Both end up at
the level and format chosen in Settings.
"""
import logging
import sys
from typing import Optional

import structlog

from nirf_portal.config import Settings, get_settings

_STDLIB_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure stdlib logging and structlog from settings."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    logging.basicConfig(
        level=level,
        format=_STDLIB_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    if settings.LOG_FORMAT == "json":
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
