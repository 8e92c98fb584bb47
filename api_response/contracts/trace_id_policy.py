"""
api_response.contracts.trace_id_policy

Purpose:
    Central policy for trace IDs (state attribute, log field, response header).

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TraceIdPolicy:
    state_attribute: str = "trace_id"
    response_header: str = "X-Trace-Id"
    echo_header: bool = True
