"""
api_response.autoconfig

Purpose:
    One-call wiring of the add-on into a FastAPI application.

Usage:
    app = FastAPI()
    configure_api_response(app)

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from api_response.contracts.trace_id_policy import TraceIdPolicy
from api_response.error_handlers import register_error_handlers
from api_response.logging.logging_config import configure_logging
from api_response.middleware.trace_id import TraceIdMiddleware
from api_response.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_api_response(app: FastAPI, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    if settings.configure_logging:
        configure_logging(settings.log_level)

    policy = TraceIdPolicy(
        response_header=settings.trace_header,
        echo_header=settings.echo_trace_header,
    )
    app.add_middleware(TraceIdMiddleware, policy=policy)

    if settings.enabled:
        register_error_handlers(app)
    else:
        logger.info("api_response error handlers disabled (API_RESPONSE_ENABLED=false)")

    return app
