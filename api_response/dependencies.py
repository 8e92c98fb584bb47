"""
api_response.dependencies

Purpose:
    FastAPI dependencies shared by host routes.

Author:
    Kanir Pandya

Created:
    2026-03-09
"""

from __future__ import annotations

from typing import Callable

from fastapi import Request

from api_response.errors import UnsupportedMediaTypeError

DEFAULT_MEDIA_TYPES = ("application/json",)


def require_content_type(*media_types: str) -> Callable[[Request], None]:
    """
    Build a dependency that rejects requests whose Content-Type is not supported.

        @router.post("/items", dependencies=[Depends(require_content_type())])
    """
    supported = tuple(m.lower() for m in media_types) or DEFAULT_MEDIA_TYPES

    def _check_content_type(request: Request) -> None:
        raw = request.headers.get("content-type")
        media_type = (raw or "").split(";", 1)[0].strip().lower()
        if media_type not in supported:
            raise UnsupportedMediaTypeError(raw, supported)

    return _check_content_type
