"""
api_response.binding.strings

Purpose:
    String processing applied to bound request fields.
    A field's StringMode is resolved once from its markers; process_string applies it.

Design Notes:
    - Trim runs before the markup check, so the check sees the trimmed value.
    - None is never transformed (keeps null distinct from "").
    - The markup check is a single tag-opening pattern, not an HTML sanitiser.

Author:
    Kanir Pandya

Created:
    2026-03-02
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable

from api_response.annotations import AutoTrim, NoTrim, XssCheck

MARKUP_PATTERN = re.compile(r"<\s*[a-zA-Z/!]")

MARKUP_REJECTED_MESSAGE = (
    "Security Error: HTML tags or XSS payloads are not allowed in the request."
)


class StringPolicy(str, Enum):
    """
    Default handling for string fields without markers.

    OPT_IN: nothing by default; AutoTrim / XssCheck enable each step.
    OPT_OUT: trim and check by default; NoTrim disables trimming only.
    """

    OPT_IN = "opt_in"
    OPT_OUT = "opt_out"


class MarkupRejectedError(ValueError):
    def __init__(self) -> None:
        super().__init__(MARKUP_REJECTED_MESSAGE)


@dataclass(frozen=True)
class StringMode:
    trim: bool = False
    reject_markup: bool = False

    NONE: ClassVar["StringMode"]

    @property
    def is_noop(self) -> bool:
        return not (self.trim or self.reject_markup)


StringMode.NONE = StringMode()


def resolve_mode(markers: Iterable[object], policy: StringPolicy = StringPolicy.OPT_IN) -> StringMode:
    kinds = {type(m) for m in markers}

    if policy is StringPolicy.OPT_OUT:
        # NoTrim wins over AutoTrim; the markup check cannot be switched off here.
        return StringMode(trim=NoTrim not in kinds, reject_markup=True)

    return StringMode(trim=AutoTrim in kinds, reject_markup=XssCheck in kinds)


def contains_markup(value: str) -> bool:
    return MARKUP_PATTERN.search(value) is not None


def process_string(value: str | None, mode: StringMode) -> str | None:
    if value is None:
        return None

    processed = value.strip() if mode.trim else value

    if mode.reject_markup and contains_markup(processed):
        raise MarkupRejectedError()

    return processed
