"""
tests.api.conftest

Shared pytest fixtures for API tests.
Builds a small FastAPI app wired with configure_api_response.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

import pytest
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.testclient import TestClient

from api_response import (
    ApiError,
    ApiResponse,
    RawStr,
    SanitizedStr,
    Settings,
    StrictModel,
    StringPolicy,
    TrimmedStr,
    XssCheck,
    configure_api_response,
    require_content_type,
    trace_id_ctx_var,
)


class Role(str, Enum):
    admin = "admin"
    member = "member"


class UserRequest(StrictModel):
    name: TrimmedStr
    nickname: str | None = None
    bio: SanitizedStr | None = None
    content: Annotated[str | None, XssCheck()] = None
    role: Role = Role.member


class ProfileRequest(StrictModel):
    string_policy = StringPolicy.OPT_OUT

    name: str
    signature: RawStr | None = None


class ItemNotFound(ApiError):
    status = 404


def create_test_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI()
    configure_api_response(app, settings or Settings())

    @app.get("/health")
    def health():
        return ApiResponse.success("ok").to_response()

    @app.post("/users")
    def create_user(req: UserRequest):
        return ApiResponse.created("User created", req.model_dump(mode="json")).to_response()

    @app.post("/profiles")
    def update_profile(req: ProfileRequest):
        return ApiResponse.success("Profile updated", req.model_dump(mode="json")).to_response()

    @app.post("/upload", dependencies=[Depends(require_content_type())])
    def upload():
        return ApiResponse.success("Uploaded").to_response()

    @app.get("/items/{item_id}")
    def get_item(item_id: int):
        if item_id == 0:
            raise ItemNotFound(f"Item {item_id} does not exist")
        return ApiResponse.success("Item found", {"id": item_id}).to_response()

    @app.get("/search")
    def search(page: int, q: str = ""):
        return ApiResponse.success("Search results", {"page": page, "q": q}).to_response()

    @app.get("/teapot")
    def teapot():
        raise ApiError("Short and stout", 418)

    @app.get("/conflict")
    def conflict():
        raise HTTPException(status_code=409, detail="Already exists")

    @app.get("/client-closed")
    def client_closed():
        raise ApiError("Client closed request", 499)

    @app.post("/legacy-upload")
    def legacy_upload():
        raise HTTPException(status_code=415)

    @app.post("/xml-upload")
    def xml_upload():
        raise HTTPException(status_code=415, headers={"Accept": "application/xml, text/xml"})

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    @app.get("/null")
    def null_reference():
        value: Any = None
        return value.upper()

    @app.get("/trace")
    async def trace(request: Request):
        return {"ctx": trace_id_ctx_var.get(), "state": request.state.trace_id}

    return app


@pytest.fixture()
def client_factory():
    """
    Factory fixture that creates a fresh TestClient.

    IMPORTANT:
        500 responses are only observable with raise_server_exceptions=False,
        because Starlette re-raises after the catch-all handler responds.
    """

    def _make(settings: Settings | None = None, *, raise_server_exceptions: bool = False) -> TestClient:
        app = create_test_app(settings)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture()
def client(client_factory) -> TestClient:
    return client_factory()
