from __future__ import annotations

from datetime import UTC, datetime

import pytest

from satpam.cookies import parse_cookies, serialize_cookie
from satpam.domain.session import CookieOptions


def _attributes(cookie: str) -> list[str]:
    return [part.strip() for part in cookie.split(";")]


def test_parse_cookies_handles_missing_header() -> None:
    assert parse_cookies(None) == {}
    assert parse_cookies("") == {}


def test_parse_cookies_returns_name_value_pairs() -> None:
    assert parse_cookies("theme=dark; satpam=abc123") == {"theme": "dark", "satpam": "abc123"}


def test_serialize_cookie_without_options_is_bare_pair() -> None:
    assert serialize_cookie("satpam", "abc123") == "satpam=abc123"


def test_serialize_cookie_renders_attributes() -> None:
    cookie = serialize_cookie(
        "satpam",
        "abc123",
        CookieOptions(
            domain="app.test",
            path="/",
            max_age=60,
            expires=datetime(2030, 1, 1, tzinfo=UTC),
            same_site="strict",
            secure=True,
            http_only=True,
        ),
    )
    attributes = _attributes(cookie)

    assert attributes[0] == "satpam=abc123"
    assert "Domain=app.test" in attributes
    assert "Path=/" in attributes
    assert "Max-Age=60" in attributes
    assert "expires=Tue, 01 Jan 2030 00:00:00 GMT" in attributes
    assert "SameSite=strict" in attributes
    assert "Secure" in attributes
    assert "HttpOnly" in attributes


def test_serialized_cookie_parses_back_to_token() -> None:
    cookie = serialize_cookie("satpam", "tok.en-42", CookieOptions(path="/", http_only=True))

    name_value = _attributes(cookie)[0]

    assert parse_cookies(name_value) == {"satpam": "tok.en-42"}


def test_cookie_options_reject_unknown_same_site() -> None:
    with pytest.raises(ValueError):
        CookieOptions(same_site="sometimes")  # type: ignore[arg-type]
