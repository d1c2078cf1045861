"""Resolve request session tokens from cookies or URL parameters."""

from __future__ import annotations

from satpam.config import SatpamSettings
from satpam.cookies import parse_cookies, serialize_cookie
from satpam.domain.session import CookieOptions, SatpamOptions, SatpamSession
from satpam.errors import SatpamError, UnsupportedHeadersError
from satpam.resolver import Satpam, VerifyHook
from satpam.sinks import (
    CaptureCookieSink,
    CookieSink,
    DocumentCookieSink,
    HeaderCookieSink,
    HeaderWriteStrategy,
)

__all__ = [
    "CaptureCookieSink",
    "CookieOptions",
    "CookieSink",
    "DocumentCookieSink",
    "HeaderCookieSink",
    "HeaderWriteStrategy",
    "Satpam",
    "SatpamError",
    "SatpamOptions",
    "SatpamSession",
    "SatpamSettings",
    "UnsupportedHeadersError",
    "VerifyHook",
    "parse_cookies",
    "serialize_cookie",
]
