"""
api_response.binding.model

Purpose:
    StrictModel: base class for request DTOs bound from JSON bodies.

Design Notes:
    - extra="forbid" rejects unknown properties (client typos fail loudly).
    - Per-field bindings (StringMode + enum type) are computed once per model class
      from static field metadata, then only read during validation.
    - One wildcard "before" validator applies the bindings, so failures are reported
      at the field location (body.<field>) like any other validation error.
    - Enum fields accept member values/names case-insensitively.

Author:
    Kanir Pandya

Created:
    2026-03-02
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, Iterator, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.fields import FieldInfo

from api_response.annotations import FieldMarker
from api_response.binding.strings import StringMode, StringPolicy, process_string, resolve_mode


@dataclass(frozen=True)
class FieldBinding:
    mode: StringMode = StringMode.NONE
    enum_type: type[Enum] | None = None


def _annotation_markers(tp: Any) -> Iterator[FieldMarker]:
    if get_origin(tp) is Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, FieldMarker):
                yield meta
        yield from _annotation_markers(tp.__origin__)
        return

    for arg in get_args(tp):
        yield from _annotation_markers(arg)


def field_markers(field: FieldInfo) -> list[FieldMarker]:
    """Markers from the field's own metadata plus any nested Annotated[...] in its type."""
    markers = [m for m in field.metadata if isinstance(m, FieldMarker)]
    markers.extend(_annotation_markers(field.annotation))
    return markers


def _mentions_str(tp: Any) -> bool:
    if tp is str:
        return True
    if get_origin(tp) is Annotated:
        return _mentions_str(tp.__origin__)
    return any(_mentions_str(arg) for arg in get_args(tp))


def _enum_type(tp: Any) -> type[Enum] | None:
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp
    if get_origin(tp) is Annotated:
        return _enum_type(tp.__origin__)

    # Optional[SomeEnum] / SomeEnum | None
    candidates = [a for a in get_args(tp) if a is not type(None)]
    if len(candidates) == 1:
        return _enum_type(candidates[0])
    return None


def _match_enum(enum_type: type[Enum], value: str) -> Any:
    folded = value.casefold()
    for member in enum_type:
        if isinstance(member.value, str) and member.value.casefold() == folded:
            return member
    for member in enum_type:
        if member.name.casefold() == folded:
            return member
    # Let pydantic report the enum error with its own message.
    return value


def build_field_bindings(
    fields: dict[str, FieldInfo], policy: StringPolicy = StringPolicy.OPT_IN
) -> dict[str, FieldBinding]:
    bindings: dict[str, FieldBinding] = {}

    for name, field in fields.items():
        markers = field_markers(field)

        mode = StringMode.NONE
        if markers or (policy is StringPolicy.OPT_OUT and _mentions_str(field.annotation)):
            mode = resolve_mode(markers, policy)

        enum_type = _enum_type(field.annotation)

        if mode.is_noop and enum_type is None:
            continue
        bindings[name] = FieldBinding(mode=mode, enum_type=enum_type)

    return bindings


def _apply_mode(value: Any, mode: StringMode) -> Any:
    if isinstance(value, str):
        return process_string(value, mode)
    if isinstance(value, (list, tuple)):
        return type(value)(_apply_mode(v, mode) for v in value)
    if isinstance(value, dict):
        # Values only; keys are left as sent.
        return {k: _apply_mode(v, mode) for k, v in value.items()}
    return value


class StrictModel(BaseModel):
    """
    Strict request DTO base.

    Subclasses opt into string handling per field with AutoTrim / XssCheck, or set
    string_policy = StringPolicy.OPT_OUT to trim and check every string field
    (NoTrim keeps whitespace for a single field).
    """

    model_config = ConfigDict(extra="forbid")

    string_policy: ClassVar[StringPolicy] = StringPolicy.OPT_IN

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        # Incomplete models (unresolved forward refs) resolve on first validation.
        bindings = None
        if cls.__pydantic_complete__:
            bindings = build_field_bindings(cls.model_fields, cls.string_policy)
        cls.__field_bindings__ = bindings

    @classmethod
    def field_bindings(cls) -> dict[str, FieldBinding]:
        bindings = cls.__dict__.get("__field_bindings__")
        if bindings is None:
            bindings = build_field_bindings(cls.model_fields, cls.string_policy)
            cls.__field_bindings__ = bindings
        return bindings

    @field_validator("*", mode="before")
    @classmethod
    def _apply_field_binding(cls, value: Any, info: ValidationInfo) -> Any:
        binding = cls.field_bindings().get(info.field_name)
        if binding is None:
            return value

        if binding.enum_type is not None and isinstance(value, str):
            return _match_enum(binding.enum_type, value)

        return _apply_mode(value, binding.mode)
