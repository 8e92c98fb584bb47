"""
api_response.models

Purpose:
    Success envelope returned by API endpoints.
    The envelope contract is intentionally "public" and stable:

        {"status": 200, "message": "...", "content": ..., "timestamp": "2026-...Z"}

Notes:
    - Immutable (frozen) once built; the factories below are the only intended builders.
    - timestamp is set to "now" (UTC) at construction and cannot be supplied by callers.
    - None members (including absent content) are omitted from the wire shape.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Generic, TypeVar

from fastapi.responses import JSONResponse
from pydantic import (
    BaseModel,
    ConfigDict,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    computed_field,
    model_serializer,
)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    status: int
    message: str | None = None
    content: T | None = None

    _timestamp: datetime = PrivateAttr(default_factory=_utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @model_serializer(mode="wrap")
    def _omit_none(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # Only top-level members; content keeps its own None values.
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None}

    # ---------------------------------------------------------------------------
    # Factories
    # ---------------------------------------------------------------------------

    @classmethod
    def success(cls, message: str | None, content: T | None = None) -> ApiResponse[T]:
        return cls(status=HTTPStatus.OK.value, message=message, content=content)

    @classmethod
    def created(cls, message: str | None, content: T | None = None) -> ApiResponse[T]:
        return cls(status=HTTPStatus.CREATED.value, message=message, content=content)

    @classmethod
    def of_status(
        cls,
        message: str | None,
        status: int | HTTPStatus,
        content: T | None = None,
    ) -> ApiResponse[T]:
        return cls(status=int(status), message=message, content=content)

    # ---------------------------------------------------------------------------
    # Wire helpers
    # ---------------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_response(self, headers: dict[str, str] | None = None) -> JSONResponse:
        return JSONResponse(status_code=self.status, content=self.to_json(), headers=headers)
