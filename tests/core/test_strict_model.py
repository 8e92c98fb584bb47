"""
tests.core.test_strict_model

Purpose:
    StrictModel binding: bindings resolved once per class from field metadata,
    then applied on validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

import pytest
from pydantic import ValidationError

from api_response.annotations import AutoTrim, NoTrim, SanitizedStr, TrimmedStr, XssCheck, XssSafeStr
from api_response.binding import FieldBinding, StrictModel, StringMode, StringPolicy
from api_response.binding.model import field_markers


class Color(str, Enum):
    red = "red"
    dark_blue = "navy"


class Comment(StrictModel):
    author: TrimmedStr
    body: SanitizedStr
    tags: list[Annotated[str, AutoTrim()]] = []
    reply_to: Optional[Annotated[str, XssCheck()]] = None
    note: str | None = None
    count: int = 0
    color: Color | None = None


class Profile(StrictModel):
    string_policy = StringPolicy.OPT_OUT

    name: str
    motto: Annotated[str, NoTrim()] = ""
    aliases: list[str] = []
    age: int = 0


def test_bindings_resolved_at_class_creation() -> None:
    bindings = Comment.__dict__["__field_bindings__"]

    assert bindings["author"] == FieldBinding(mode=StringMode(trim=True))
    assert bindings["body"] == FieldBinding(mode=StringMode(trim=True, reject_markup=True))
    assert bindings["tags"].mode == StringMode(trim=True)
    assert bindings["reply_to"].mode == StringMode(reject_markup=True)
    assert bindings["color"] == FieldBinding(enum_type=Color)
    assert "note" not in bindings
    assert "count" not in bindings


def test_bindings_are_reused() -> None:
    assert Comment.field_bindings() is Comment.field_bindings()


def test_opt_out_bindings_cover_string_fields_only() -> None:
    bindings = Profile.field_bindings()

    assert bindings["name"].mode == StringMode(trim=True, reject_markup=True)
    assert bindings["motto"].mode == StringMode(trim=False, reject_markup=True)
    assert bindings["aliases"].mode == StringMode(trim=True, reject_markup=True)
    assert "age" not in bindings


def test_field_markers_found_inside_optional() -> None:
    markers = field_markers(Comment.model_fields["reply_to"])
    assert [type(m) for m in markers] == [XssCheck]


def test_opt_in_model_applies_marked_fields_only() -> None:
    c = Comment(author="  ann ", body="  hi  ", note="  raw  ")
    assert c.author == "ann"
    assert c.body == "hi"
    assert c.note == "  raw  "


def test_list_elements_are_processed() -> None:
    c = Comment(author="a", body="b", tags=[" x ", "y  "])
    assert c.tags == ["x", "y"]


def test_markup_rejected_at_field_location() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Comment(author="a", body="<script>x</script>")

    errors = excinfo.value.errors()
    assert len(errors) == 1
    assert errors[0]["loc"] == ("body",)
    assert "Security Error" in errors[0]["msg"]


def test_optional_marked_field_accepts_none() -> None:
    assert Comment(author="a", body="b", reply_to=None).reply_to is None

    with pytest.raises(ValidationError):
        Comment(author="a", body="b", reply_to="<a href=x>")


def test_enum_matches_value_or_name_case_insensitively() -> None:
    assert Comment(author="a", body="b", color="RED").color is Color.red
    assert Comment(author="a", body="b", color="Navy").color is Color.dark_blue
    assert Comment(author="a", body="b", color="DARK_BLUE").color is Color.dark_blue

    with pytest.raises(ValidationError):
        Comment(author="a", body="b", color="green")


def test_extra_fields_forbidden() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Comment(author="a", body="b", bogus=1)

    assert excinfo.value.errors()[0]["type"] == "extra_forbidden"


def test_opt_out_model() -> None:
    p = Profile(name="  ann  ", motto="  carpe diem  ", aliases=[" a "])
    assert p.name == "ann"
    assert p.motto == "  carpe diem  "
    assert p.aliases == ["a"]

    with pytest.raises(ValidationError):
        Profile(name="ann", motto="  <i>no</i>  ")


def test_model_validate_json_uses_bindings() -> None:
    c = Comment.model_validate_json('{"author": "  john  ", "body": "hi"}')
    assert c.author == "john"


class Labels(StrictModel):
    tags: dict[str, XssSafeStr] = {}


class Metadata(StrictModel):
    string_policy = StringPolicy.OPT_OUT

    meta: dict[str, str] = {}
    groups: dict[str, list[str]] = {}


def test_marked_dict_values_are_checked() -> None:
    assert Labels(tags={"env": "prod"}).tags == {"env": "prod"}

    with pytest.raises(ValidationError) as excinfo:
        Labels(tags={"env": "<script>x</script>"})

    assert "Security Error" in excinfo.value.errors()[0]["msg"]


def test_opt_out_dict_values_are_processed() -> None:
    m = Metadata(meta={"a": "  x  "}, groups={"g": [" y "]})
    assert m.meta == {"a": "x"}
    assert m.groups == {"g": ["y"]}

    with pytest.raises(ValidationError):
        Metadata(meta={"a": "<b>x</b>"})

    with pytest.raises(ValidationError):
        Metadata(groups={"g": ["<img src=x>"]})


def test_dict_keys_are_left_as_sent() -> None:
    assert Metadata(meta={" k ": "v"}).meta == {" k ": "v"}
