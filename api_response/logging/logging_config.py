"""
api_response.logging.logging_config

Purpose:
    Optional logging configuration for host applications.
    Ensures trace_id is present in logs (including uvicorn.access and uvicorn.error).

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import logging

from api_response.logging.trace_id_filter import TraceIdFilter

LOG_FORMAT = "%(asctime)s | %(levelname)s | trace_id=%(trace_id)s | %(name)s | %(message)s"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(TraceIdFilter())
    return handler


def _configure_logger(
    logger_name: str, handler: logging.Handler, level: int, *, clear_handlers: bool
) -> None:
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if clear_handlers:
        logger.handlers.clear()

    logger.addHandler(handler)
    logger.propagate = False


def configure_logging(level: str | int = "INFO") -> logging.Handler:
    """
    Install a trace-aware stream handler and return it.

    The root logger only gets the handler if no trace-aware handler is attached
    yet, so calling this twice does not duplicate lines.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = _make_handler(level)

    # Don't clear root handlers to avoid surprising other libs
    root = logging.getLogger()
    root.setLevel(level)
    if not any(
        isinstance(f, TraceIdFilter) for h in root.handlers for f in h.filters
    ):
        root.addHandler(handler)

    # Uvicorn installs its own handlers; clear them so our formatter/filter wins.
    for name in UVICORN_LOGGERS:
        _configure_logger(name, handler, level, clear_handlers=True)

    return handler
