"""
api_response.logging.trace_id_filter

Purpose:
    Logging filter that injects trace_id from contextvars into log records.

Author:
    Kanir Pandya
Created:
    2026-02-15
"""

from __future__ import annotations

import logging

from api_response.logging.request_context import trace_id_ctx_var


class TraceIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = trace_id_ctx_var.get() or "-"
        return True
