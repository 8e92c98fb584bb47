"""
tests.api.test_binding

Purpose:
    End-to-end tests for field-level string handling on request bodies.
"""

from __future__ import annotations


def test_auto_trim_field_is_trimmed(client) -> None:
    r = client.post("/users", json={"name": "  john  "})
    assert r.status_code == 201, r.text

    data = r.json()
    assert data["status"] == 201
    assert data["message"] == "User created"
    assert data["content"]["name"] == "john"


def test_unmarked_field_is_untouched_under_opt_in(client) -> None:
    r = client.post("/users", json={"name": "john", "nickname": "  johnny  "})
    assert r.status_code == 201, r.text
    assert r.json()["content"]["nickname"] == "  johnny  "


def test_unmarked_field_is_trimmed_under_opt_out(client) -> None:
    r = client.post("/profiles", json={"name": "  john  "})
    assert r.status_code == 200, r.text
    assert r.json()["content"]["name"] == "john"


def test_no_trim_keeps_whitespace_but_still_checks_markup(client) -> None:
    r = client.post("/profiles", json={"name": "john", "signature": "  -- j  "})
    assert r.status_code == 200, r.text
    assert r.json()["content"]["signature"] == "  -- j  "

    r2 = client.post("/profiles", json={"name": "john", "signature": "  <b>j</b>  "})
    assert r2.status_code == 400
    assert set(r2.json()["errors"]) == {"signature"}


def test_opt_out_rejects_markup_on_plain_fields(client) -> None:
    r = client.post("/profiles", json={"name": "<img src=x onerror=alert(1)>"})
    assert r.status_code == 400
    assert "onerror" not in r.text


def test_sanitized_field_is_trimmed_then_checked(client) -> None:
    r = client.post("/users", json={"name": "ann", "bio": "   likes 3 < 4   "})
    assert r.status_code == 201, r.text
    assert r.json()["content"]["bio"] == "likes 3 < 4"

    r2 = client.post("/users", json={"name": "ann", "bio": "   </p>   "})
    assert r2.status_code == 400


def test_null_values_pass_through(client) -> None:
    r = client.post("/users", json={"name": "ann", "bio": None, "content": None})
    assert r.status_code == 201, r.text

    content = r.json()["content"]
    assert content["bio"] is None
    assert content["content"] is None


def test_enum_is_case_insensitive(client) -> None:
    r = client.post("/users", json={"name": "ann", "role": "ADMIN"})
    assert r.status_code == 201, r.text
    assert r.json()["content"]["role"] == "admin"


def test_unknown_property_rejected(client) -> None:
    r = client.post("/users", json={"name": "ann", "nick_name": "a"})
    assert r.status_code == 400
    assert r.json()["errors"] == {"nick_name": "Unknown field: nick_name."}
