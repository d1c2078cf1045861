"""Destinations for serialized Set-Cookie values."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from satpam.errors import UnsupportedHeadersError

logger = logging.getLogger(__name__)

SET_COOKIE_HEADER = "Set-Cookie"


@runtime_checkable
class CookieSink(Protocol):
    """Anything that can persist a serialized cookie string."""

    def persist(self, cookie: str) -> None:
        """Store ``cookie`` wherever this sink writes to."""


class HeaderWriteStrategy(str, Enum):
    """How a response header bag accepts the Set-Cookie value."""

    SETTER_FUNCTION = "setter_function"
    SET_METHOD = "set_method"
    PLAIN_ASSIGNMENT = "plain_assignment"

    @classmethod
    def probe(cls, headers: Any) -> HeaderWriteStrategy:
        """Pick the first supported write path for ``headers``."""
        if callable(getattr(headers, "set_header", None)):
            return cls.SETTER_FUNCTION
        if callable(getattr(headers, "set", None)):
            return cls.SET_METHOD
        if callable(getattr(headers, "__setitem__", None)):
            return cls.PLAIN_ASSIGNMENT
        logger.warning(
            "response headers do not accept writes",
            extra={"data": {"headers_type": type(headers).__name__}},
        )
        raise UnsupportedHeadersError(
            f"cannot write {SET_COOKIE_HEADER} to {type(headers).__name__}"
        )


class HeaderCookieSink:
    """Write the cookie into a server-side response header bag."""

    def __init__(self, headers: Any, *, header_name: str = SET_COOKIE_HEADER) -> None:
        self._headers = headers
        self._header_name = header_name

    @property
    def headers(self) -> Any:
        return self._headers

    def persist(self, cookie: str) -> None:
        strategy = HeaderWriteStrategy.probe(self._headers)
        match strategy:
            case HeaderWriteStrategy.SETTER_FUNCTION:
                self._headers.set_header(self._header_name, cookie)
            case HeaderWriteStrategy.SET_METHOD:
                self._headers.set(self._header_name, cookie)
            case HeaderWriteStrategy.PLAIN_ASSIGNMENT:
                self._headers[self._header_name] = cookie
        logger.debug(
            "wrote cookie header",
            extra={"data": {"strategy": strategy.value, "header": self._header_name}},
        )


class DocumentCookieSink:
    """Write the cookie into a client-side document cookie store."""

    def __init__(self, document: Any) -> None:
        self._document = document

    def persist(self, cookie: str) -> None:
        self._document.cookie = cookie


class CaptureCookieSink:
    """Keep persisted cookies in memory."""

    def __init__(self) -> None:
        self.cookies: list[str] = []

    def persist(self, cookie: str) -> None:
        self.cookies.append(cookie)

    @property
    def last(self) -> str | None:
        return self.cookies[-1] if self.cookies else None


__all__ = [
    "SET_COOKIE_HEADER",
    "CaptureCookieSink",
    "CookieSink",
    "DocumentCookieSink",
    "HeaderCookieSink",
    "HeaderWriteStrategy",
]
