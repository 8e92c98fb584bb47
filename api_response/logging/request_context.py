"""
api_response.logging.request_context

Purpose:
    Request-scoped context storage using contextvars.
    Enables trace_id propagation into logs.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import contextvars

trace_id_ctx_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trace_id",
    default=None,
)
