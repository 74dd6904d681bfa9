"""Logging utilities for the matching engine."""

from __future__ import annotations

import logging
from typing import Any

import structlog

from . import __version__

APP_NAME = "careermatch"


def add_app_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Stamp every event with the application name and version."""
    event_dict.setdefault("app", APP_NAME)
    event_dict.setdefault("app_version", __version__)
    return event_dict


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output.

    Events carry the app name and version, and any context bound with
    ``structlog.contextvars`` (the pipeline binds ``profile_id``).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_app_context,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
