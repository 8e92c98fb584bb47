"""
api_response.errors

Purpose:
    Exception types translated by the global handlers into ProblemDetail responses.
    Application code raises ApiError (or a subclass) for business failures.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Sequence

from api_response.contracts.error_contract import reason_phrase


class ApiError(Exception):
    """
    Business failure carrying its own HTTP status.

    Any code in 100-599 is accepted, including non-standard ones such as 499.
    Subclasses may pin a status:

        class OrderNotFound(ApiError):
            status = HTTPStatus.NOT_FOUND
    """

    status: int = HTTPStatus.INTERNAL_SERVER_ERROR.value

    def __init__(self, message: str, status: int | HTTPStatus | None = None) -> None:
        super().__init__(message)
        self.message = message
        status = int(status if status is not None else self.status)
        if not 100 <= status <= 599:
            raise ValueError(f"HTTP status must be within 100-599, got {status}")
        self.status = status

    def __str__(self) -> str:
        return f"{self.status} {reason_phrase(self.status)}: {self.message}"


class UnsupportedMediaTypeError(Exception):
    def __init__(self, content_type: str | None, supported: Sequence[str]) -> None:
        self.content_type = content_type
        self.supported = tuple(supported)
        super().__init__(f"Content type '{content_type}' is not supported")
