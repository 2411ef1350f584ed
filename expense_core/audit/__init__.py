"""Structured logging package."""

from expense_core.audit.logger import configure_logging, get_logger, log_store_error

__all__ = ["configure_logging", "get_logger", "log_store_error"]
