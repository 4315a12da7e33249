"""Logging configuration for the application."""

import logging
import sys

from orgfinder.core.config import get_settings
from orgfinder.middleware.request_id import RequestIdLogFilter

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Configure application-wide logging on stdout.

    Root level is DEBUG when settings.debug is True, otherwise INFO. Every
    line carries the current request ID ("-" outside a request).
    SQL statement logging follows database_echo only, so debug mode does
    not flood the output with every facet sub-query.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    logging.basicConfig(
        level=log_level,
        format=_LOG_FORMAT,
        handlers=[handler],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
