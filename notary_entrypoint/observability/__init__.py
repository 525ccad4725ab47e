"""Observability helpers for the notary-server entrypoint."""

from .logging import configure_logging, get_logger, log_context, resolve_log_level

__all__ = ["configure_logging", "get_logger", "log_context", "resolve_log_level"]
