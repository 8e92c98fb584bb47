"""
api_response.annotations

Purpose:
    Field markers that control string handling of StrictModel request fields.
    Markers are placed in typing.Annotated metadata and carry no data.

Usage:
    class CommentRequest(StrictModel):
        author: Annotated[str, AutoTrim()]
        body: Annotated[str, AutoTrim(), XssCheck()]
        signature: Annotated[str | None, NoTrim()] = None

Author:
    Kanir Pandya

Created:
    2026-03-02
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated


@dataclass(frozen=True)
class AutoTrim:
    """Strip leading/trailing whitespace from the incoming value."""


@dataclass(frozen=True)
class XssCheck:
    """Reject values that contain an HTML tag opening such as '<script' or '</'."""


@dataclass(frozen=True)
class NoTrim:
    """Keep whitespace as sent. Only meaningful for StringPolicy.OPT_OUT models."""


FieldMarker = AutoTrim | XssCheck | NoTrim

TrimmedStr = Annotated[str, AutoTrim()]
XssSafeStr = Annotated[str, XssCheck()]
SanitizedStr = Annotated[str, AutoTrim(), XssCheck()]
RawStr = Annotated[str, NoTrim()]
