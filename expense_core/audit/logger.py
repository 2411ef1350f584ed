"""
Structured Logging

DESIGN DECISION: Every failure that crosses the store boundary is logged
with the operation name and the key it touched, so a degraded read or a
rejected write can be traced from the log alone.

The logger:
- Is configured once, on first import
- Routes through stdlib logging so host applications keep control of handlers
- Renders JSON in production and a readable console line in debug mode
"""

import logging
from typing import Optional

import structlog

from expense_core.config import get_settings


def configure_logging(level: Optional[str] = None, debug: Optional[bool] = None) -> None:
    """
    Configure structlog for the package.

    Args:
        level: Minimum log level name. Defaults to AppSettings.log_level.
        debug: Use the console renderer instead of JSON.
               Defaults to AppSettings.debug_mode.
    """
    app_settings = get_settings().app
    level = level or app_settings.log_level
    debug = app_settings.debug_mode if debug is None else debug

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.getLogger("expense_core").setLevel(level)


def get_logger(name: str = "expense_core"):
    """Return a structlog logger bound to a stdlib logger of the given name."""
    return structlog.get_logger(name)


def log_store_error(logger, event: str, error, **extra) -> None:
    """
    Log a storage error with its operation/key context.

    Read-path failures are warnings (the caller gets "absent"),
    everything else is an error.
    """
    fields = {
        "operation": getattr(error, "operation", None),
        "key": getattr(error, "key", None),
        "error_type": type(error).__name__,
        "error": str(error),
        **extra,
    }
    if fields["operation"] in ("get_item", "get_all_keys"):
        logger.warning(event, **fields)
    else:
        logger.error(event, **fields)


configure_logging()
