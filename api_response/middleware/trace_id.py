"""
api_response.middleware.trace_id

Purpose:
    Middleware that assigns a fresh trace-id to each request for log correlation.

Notes:
    - A new UUID4 per request; incoming headers are not trusted.
    - The id is stored on request.state and in trace_id_ctx_var, then the context
      variable is always reset, even when downstream processing raised.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from api_response.contracts.trace_id_policy import TraceIdPolicy
from api_response.logging.request_context import trace_id_ctx_var


class TraceIdMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, policy: TraceIdPolicy | None = None) -> None:
        super().__init__(app)
        self._policy = policy or TraceIdPolicy()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        policy = self._policy
        trace_id = str(uuid.uuid4())

        # Attach for handlers/logging
        setattr(request.state, policy.state_attribute, trace_id)
        token = trace_id_ctx_var.set(trace_id)
        try:
            response: Response = await call_next(request)
        finally:
            trace_id_ctx_var.reset(token)

        if policy.echo_header:
            response.headers[policy.response_header] = trace_id
        return response
