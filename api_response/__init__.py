"""
api_response

Response envelope, RFC 9457 error translation, per-field string handling and
trace-id correlation for FastAPI services.
"""

from api_response.annotations import AutoTrim, NoTrim, RawStr, SanitizedStr, TrimmedStr, XssCheck, XssSafeStr
from api_response.autoconfig import configure_api_response
from api_response.binding import MarkupRejectedError, StrictModel, StringMode, StringPolicy, process_string
from api_response.contracts.error_contract import ProblemDetail
from api_response.dependencies import require_content_type
from api_response.error_handlers import register_error_handlers
from api_response.errors import ApiError, UnsupportedMediaTypeError
from api_response.logging.logging_config import configure_logging
from api_response.logging.request_context import trace_id_ctx_var
from api_response.middleware.trace_id import TraceIdMiddleware
from api_response.models import ApiResponse
from api_response.settings import Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ApiResponse",
    "AutoTrim",
    "MarkupRejectedError",
    "NoTrim",
    "ProblemDetail",
    "RawStr",
    "SanitizedStr",
    "Settings",
    "StrictModel",
    "StringMode",
    "StringPolicy",
    "TraceIdMiddleware",
    "TrimmedStr",
    "UnsupportedMediaTypeError",
    "XssCheck",
    "XssSafeStr",
    "configure_api_response",
    "configure_logging",
    "get_settings",
    "process_string",
    "register_error_handlers",
    "require_content_type",
    "trace_id_ctx_var",
]
