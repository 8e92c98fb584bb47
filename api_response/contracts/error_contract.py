"""
api_response.contracts.error_contract

Purpose:
    Stable error contract for the API (RFC 9457 problem details).
    Used by global exception handlers to ensure consistent client responses.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

PROBLEM_JSON = "application/problem+json"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown Status"


class ProblemDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="about:blank", description="Problem type URI")
    title: str = Field(..., description="Short summary (HTTP reason phrase)")
    status: int = Field(..., description="HTTP status code")
    detail: str | None = Field(default=None, description="Human-readable explanation")
    instance: str | None = Field(default=None, description="Request path")

    trace_id: str = Field(..., alias="traceId", description="Request correlation id for debugging")
    timestamp: datetime = Field(default_factory=_utcnow)
    errors: dict[str, str] | None = Field(
        default=None, description="Per-field messages (validation failures only)"
    )

    @classmethod
    def for_status(cls, status: int, detail: str | None, **kwargs: Any) -> ProblemDetail:
        status = int(status)
        return cls(title=reason_phrase(status), status=status, detail=detail, **kwargs)

    def to_response(self, headers: dict[str, str] | None = None) -> JSONResponse:
        return JSONResponse(
            status_code=self.status,
            content=self.model_dump(mode="json", by_alias=True, exclude_none=True),
            headers=headers,
            media_type=PROBLEM_JSON,
        )
