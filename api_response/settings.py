"""
api_response.settings

Purpose:
    Centralized configuration for the api_response add-on.
    Defaults can be overridden from the environment (API_RESPONSE_*).

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "API_RESPONSE_"


class Settings(BaseModel):
    # Global exception handlers; the trace-id middleware is always installed.
    enabled: bool = Field(default=True)

    trace_header: str = Field(default="X-Trace-Id")
    echo_trace_header: bool = Field(default=True)

    configure_logging: bool = Field(default=False)
    log_level: str = Field(default="INFO")


def _as_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return None


def _env(name: str) -> str | None:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def get_settings() -> Settings:
    overrides: dict[str, object] = {}

    for field_name in ("enabled", "echo_trace_header", "configure_logging"):
        raw = _env(field_name.upper())
        parsed = _as_bool(raw)
        if raw is not None and parsed is None:
            logger.warning("Ignoring unparsable %s%s=%r", ENV_PREFIX, field_name.upper(), raw)
        if parsed is not None:
            overrides[field_name] = parsed

    for field_name in ("trace_header", "log_level"):
        raw = _env(field_name.upper())
        if raw is not None:
            overrides[field_name] = raw

    return Settings(**overrides)
