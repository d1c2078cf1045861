"""Exceptions raised by the token resolver and its cookie sinks."""

from __future__ import annotations


class SatpamError(Exception):
    """Base class for satpam failures."""


class UnsupportedHeadersError(SatpamError, TypeError):
    """Raised when a response header bag cannot accept a Set-Cookie write."""


__all__ = [
    "SatpamError",
    "UnsupportedHeadersError",
]
