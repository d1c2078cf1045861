"""Cookie header parsing and Set-Cookie serialization."""

from __future__ import annotations

import http.cookies
from email.utils import format_datetime

from starlette.requests import cookie_parser

from satpam.domain.session import CookieOptions


def parse_cookies(header_value: str | None) -> dict[str, str]:
    """Parse a raw ``Cookie`` header; absent or empty input yields ``{}``."""
    if not header_value:
        return {}
    return cookie_parser(header_value)


def serialize_cookie(name: str, value: str, options: CookieOptions | None = None) -> str:
    """Render a ``Set-Cookie`` header value for ``name=value``.

    Mirrors ``starlette.responses.Response.set_cookie`` so cookies written by
    the resolver look the same as cookies written by route handlers.
    """
    opts = options or CookieOptions()
    cookie: http.cookies.BaseCookie[str] = http.cookies.SimpleCookie()
    cookie[name] = value
    morsel = cookie[name]
    if opts.max_age is not None:
        morsel["max-age"] = opts.max_age
    if opts.expires is not None:
        morsel["expires"] = format_datetime(opts.expires, usegmt=True)
    if opts.path is not None:
        morsel["path"] = opts.path
    if opts.domain is not None:
        morsel["domain"] = opts.domain
    if opts.secure:
        morsel["secure"] = True
    if opts.http_only:
        morsel["httponly"] = True
    if opts.same_site is not None:
        morsel["samesite"] = opts.same_site
    return cookie.output(header="").strip()


__all__ = ["parse_cookies", "serialize_cookie"]
