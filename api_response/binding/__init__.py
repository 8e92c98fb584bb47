from api_response.binding.model import FieldBinding, StrictModel, build_field_bindings
from api_response.binding.strings import (
    MARKUP_REJECTED_MESSAGE,
    MarkupRejectedError,
    StringMode,
    StringPolicy,
    contains_markup,
    process_string,
    resolve_mode,
)

__all__ = [
    "FieldBinding",
    "MARKUP_REJECTED_MESSAGE",
    "MarkupRejectedError",
    "StrictModel",
    "StringMode",
    "StringPolicy",
    "build_field_bindings",
    "contains_markup",
    "process_string",
    "resolve_mode",
]
