"""
api_response.error_handlers

Purpose:
    Register global exception handlers that translate failures into RFC 9457
    ProblemDetail responses. Ensures traceId and timestamp are always included.

Design Notes:
    - Static table: exception kind -> (status, detail rule). No retries; the request
      has already failed and handling is a one-shot translation.
    - Severity follows the status class: 5xx -> error, 4xx -> warning.
    - Validation failures are split into malformed body / missing parameter /
      parameter type mismatch / field validation, in that order.
    - Raw input values of body fields are never echoed back.

Author:
    Kanir Pandya

Created:
    2026-02-15
"""

from __future__ import annotations

import logging
import re
import traceback
import uuid
from http import HTTPStatus
from typing import Any, Iterable, get_args

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api_response.contracts.error_contract import ProblemDetail
from api_response.contracts.trace_id_policy import TraceIdPolicy
from api_response.errors import ApiError, UnsupportedMediaTypeError
from api_response.logging.request_context import trace_id_ctx_var

logger = logging.getLogger(__name__)

_policy = TraceIdPolicy()

INTERNAL_ERROR_DETAIL = "Internal Server Error. Please contact technical support"
NULL_REFERENCE_DETAIL = "A null reference error occurred."
VALIDATION_FAILED_DETAIL = "Validation Failed"
MALFORMED_BODY_DETAIL = "Malformed JSON request. Please check your request body format."

_PARAM_LOCATIONS = ("query", "path", "header", "cookie")

# Pydantic error types that mean "could not convert", keyed to the expected type name.
_TYPE_ERRORS = {
    "int_parsing": "int",
    "int_type": "int",
    "int_from_float": "int",
    "float_parsing": "float",
    "float_type": "float",
    "bool_parsing": "bool",
    "bool_type": "bool",
    "decimal_parsing": "Decimal",
    "uuid_parsing": "UUID",
    "uuid_type": "UUID",
    "date_parsing": "date",
    "date_from_datetime_parsing": "date",
    "datetime_parsing": "datetime",
    "datetime_from_date_parsing": "datetime",
    "time_parsing": "time",
    "enum": "enum",
    "literal_error": "literal",
}


# ---------------------------------------------------------------------------
# Trace / response helpers
# ---------------------------------------------------------------------------

def _get_trace_id(request: Request) -> str:
    tid = getattr(request.state, _policy.state_attribute, None)
    if isinstance(tid, str) and tid:
        return tid

    tid2 = trace_id_ctx_var.get()
    if isinstance(tid2, str) and tid2:
        return tid2

    # Middleware not installed (or request failed before it ran).
    tid3 = str(uuid.uuid4())
    setattr(request.state, _policy.state_attribute, tid3)
    return tid3


def _log(status: int, msg: str, *args: Any, exc_info: BaseException | None = None) -> None:
    if status >= 500:
        logger.error(msg, *args, exc_info=exc_info)
    else:
        logger.warning(msg, *args, exc_info=exc_info)


def _problem(
    request: Request,
    trace_id: str,
    status: int,
    detail: str | None,
    *,
    errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    problem = ProblemDetail.for_status(
        status,
        detail,
        instance=request.url.path,
        trace_id=trace_id,
        errors=errors,
    )
    return problem.to_response(headers=headers)


def _bracketed(items: Iterable[str]) -> str:
    return "[" + ", ".join(items) + "]"


# ---------------------------------------------------------------------------
# Validation error helpers
# ---------------------------------------------------------------------------

def _clean_validation_errors(errors: Any) -> Any:
    """
    Clean Pydantic/FastAPI validation errors for stable client-facing responses.

    - Strip "Value error, " prefix
    - Rewrite enum messages into "Invalid <field>. Allowed values: a, b."
    - Rewrite missing required into "Missing required field: <field>."
    - Rewrite extra forbidden into "Unknown field: <field>."
    - Drop ctx entirely for minimal/stable payloads
    """
    if not isinstance(errors, list):
        return errors

    for err in errors:
        if not isinstance(err, dict):
            continue

        err_type = err.get("type")
        loc = err.get("loc", [])
        msg = err.get("msg")

        # Strip noisy prefix from validator ValueErrors
        if isinstance(msg, str):
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, ") :]
            elif msg.startswith("Value error,"):
                msg = msg[len("Value error,") :].lstrip()
            err["msg"] = msg

        # Last element of loc is usually the field name
        field_name = None
        if isinstance(loc, (list, tuple)) and len(loc) >= 2:
            field_name = loc[-1]

        if err_type == "enum" and isinstance(err.get("msg"), str) and field_name:
            options = re.findall(r"'([^']+)'", err["msg"])
            if options:
                err["msg"] = f"Invalid {field_name}. Allowed values: {', '.join(options)}."

        if err_type == "missing" and field_name:
            err["msg"] = f"Missing required field: {field_name}."

        if err_type == "extra_forbidden" and field_name:
            err["msg"] = f"Unknown field: {field_name}."

        err.pop("ctx", None)

    return errors


def _field_path(loc: Any) -> str:
    parts = [str(p) for p in (loc or [])]
    if parts and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts) or "body"


def _merge_field_errors(errors: list[dict[str, Any]]) -> dict[str, str]:
    merged: dict[str, str] = {}
    for err in errors:
        key = _field_path(err.get("loc"))
        msg = str(err.get("msg") or "Invalid value")
        merged[key] = f"{merged[key]}; {msg}" if key in merged else msg
    return merged


def _is_malformed_body(err: dict[str, Any]) -> bool:
    loc = list(err.get("loc") or [])
    return err.get("type") == "json_invalid" or loc == ["body"]


def _param_location(err: dict[str, Any]) -> str | None:
    loc = err.get("loc") or []
    if len(loc) >= 2 and loc[0] in _PARAM_LOCATIONS:
        return str(loc[0])
    return None


def _find_param(dependant: Any, location: str, name: str) -> Any:
    for param in getattr(dependant, f"{location}_params", None) or ():
        if name in (getattr(param, "alias", None), getattr(param, "name", None)):
            return param
    for sub in getattr(dependant, "dependencies", None) or ():
        found = _find_param(sub, location, name)
        if found is not None:
            return found
    return None


def _type_name(annotation: Any) -> str | None:
    if annotation is None:
        return None
    # Optional[X] -> X
    args = [a for a in get_args(annotation) if a is not type(None)]
    if len(args) == 1 and type(None) in get_args(annotation):
        annotation = args[0]
    return getattr(annotation, "__name__", None) or str(annotation)


def _param_type_name(request: Request, location: str, name: str) -> str | None:
    dependant = getattr(request.scope.get("route"), "dependant", None)
    if dependant is None:
        return None
    param = _find_param(dependant, location, name)
    annotation = getattr(getattr(param, "field_info", None), "annotation", None)
    return _type_name(annotation)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_error_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the FastAPI app.
    """

    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        trace_id = _get_trace_id(request)

        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        origin = frames[-1] if frames else None
        location = origin.filename if origin else "Unknown File"
        line_number = origin.lineno if origin else -1

        logger.error(
            "[TraceID: %s] Error in %s:%s - Message: %s",
            trace_id,
            location,
            line_number,
            exc,
        )
        return _problem(request, trace_id, HTTPStatus.INTERNAL_SERVER_ERROR, INTERNAL_ERROR_DETAIL)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        trace_id = _get_trace_id(request)
        status = HTTPStatus.BAD_REQUEST

        errors = _clean_validation_errors(jsonable_encoder(exc.errors()))

        malformed = next((e for e in errors if _is_malformed_body(e)), None)
        if malformed is not None:
            _log(status, "[TraceID: %s] Malformed JSON request: %s", trace_id, malformed.get("msg"))
            return _problem(request, trace_id, status, MALFORMED_BODY_DETAIL)

        for err in errors:
            location = _param_location(err)
            if location is None or err.get("type") != "missing":
                continue
            name = str(err["loc"][-1])
            type_name = _param_type_name(request, location, name) or location
            message = f"Required request parameter '{name}' (type: {type_name}) is missing."
            _log(status, "[TraceID: %s] Missing parameter: %s", trace_id, message)
            return _problem(request, trace_id, status, message)

        for err in errors:
            location = _param_location(err)
            if location is None or err.get("type") not in _TYPE_ERRORS:
                continue
            name = str(err["loc"][-1])
            type_name = (
                _param_type_name(request, location, name)
                or _TYPE_ERRORS.get(err.get("type"))
                or "Unknown"
            )
            message = (
                f"Invalid value '{err.get('input')}' for parameter '{name}'. "
                f"Expected type: {type_name}."
            )
            _log(status, "[TraceID: %s] Type mismatch error: %s", trace_id, message)
            return _problem(request, trace_id, status, message)

        field_errors = _merge_field_errors(errors)
        _log(status, "[TraceID: %s] Validation error: %s", trace_id, field_errors)
        return _problem(request, trace_id, status, VALIDATION_FAILED_DETAIL, errors=field_errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        trace_id = _get_trace_id(request)
        status = exc.status_code
        headers = dict(exc.headers) if exc.headers else None

        if status == HTTPStatus.NOT_FOUND and exc.detail in (None, "", HTTPStatus.NOT_FOUND.phrase):
            message = f"The requested resource '{request.url.path}' was not found."
            _log(status, "[TraceID: %s] 404 Not Found: %s", trace_id, message)
        elif status == HTTPStatus.METHOD_NOT_ALLOWED:
            allow = (headers or {}).get("Allow") or (headers or {}).get("allow") or ""
            methods = [m.strip() for m in allow.split(",") if m.strip()]
            message = (
                f"Method '{request.method}' is not supported for this endpoint. "
                f"Supported methods are: {_bracketed(methods)}"
            )
            _log(status, "[TraceID: %s] Method not allowed: %s", trace_id, message)
        elif status == HTTPStatus.UNSUPPORTED_MEDIA_TYPE:
            # RFC 7694: supported types may be advertised via Accept / Accept-Post.
            lowered = {k.lower(): v for k, v in (headers or {}).items()}
            advertised = lowered.get("accept") or lowered.get("accept-post") or ""
            media_types = [m.strip() for m in advertised.split(",") if m.strip()]
            message = f"Content type '{request.headers.get('content-type')}' is not supported."
            if media_types:
                message += f" Supported content types: {_bracketed(media_types)}"
            _log(status, "[TraceID: %s] Unsupported media type: %s", trace_id, message)
        else:
            message = str(exc.detail) if exc.detail is not None else None
            _log(status, "[TraceID: %s] HTTP error: %s | Status: %s", trace_id, message, status)

        return _problem(request, trace_id, status, message, headers=headers)

    @app.exception_handler(UnsupportedMediaTypeError)
    async def handle_unsupported_media_type(
        request: Request, exc: UnsupportedMediaTypeError
    ) -> JSONResponse:
        trace_id = _get_trace_id(request)
        status = HTTPStatus.UNSUPPORTED_MEDIA_TYPE
        message = (
            f"Content type '{exc.content_type}' is not supported. "
            f"Supported content types: {_bracketed(exc.supported)}"
        )
        _log(status, "[TraceID: %s] Unsupported media type: %s", trace_id, message)
        return _problem(request, trace_id, status, message)

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        trace_id = _get_trace_id(request)
        status = exc.status
        _log(
            status,
            "[TraceID: %s] Business logic exception: %s | Status: %s",
            trace_id,
            exc.message,
            status,
        )
        return _problem(request, trace_id, status, exc.message)

    async def handle_null_reference(request: Request, exc: Exception) -> JSONResponse:
        if "'NoneType'" not in str(exc):
            return await handle_unexpected_error(request, exc)

        trace_id = _get_trace_id(request)
        logger.error("[TraceID: %s] Null reference error occurred: ", trace_id, exc_info=exc)
        return _problem(request, trace_id, HTTPStatus.INTERNAL_SERVER_ERROR, NULL_REFERENCE_DETAIL)

    app.add_exception_handler(AttributeError, handle_null_reference)
    app.add_exception_handler(TypeError, handle_null_reference)
    app.add_exception_handler(Exception, handle_unexpected_error)
