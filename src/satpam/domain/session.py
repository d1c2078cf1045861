"""Session result and option records for token resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

DEFAULT_COOKIE_NAME = "satpam"

SameSite = Literal["lax", "strict", "none"]
_SAME_SITE_VALUES: frozenset[str] = frozenset({"lax", "strict", "none"})


@dataclass(frozen=True, slots=True)
class SatpamSession:
    """Outcome of resolving a token for the current request."""

    status: bool = False
    token: str = ""

    def __post_init__(self) -> None:
        if self.status != (self.token != ""):
            raise ValueError("status must be true exactly when token is non-empty")

    @classmethod
    def empty(cls) -> SatpamSession:
        return cls(status=False, token="")

    @classmethod
    def resolved(cls, token: str) -> SatpamSession:
        """Return a successful session carrying ``token``."""
        return cls(status=True, token=token)


@dataclass(frozen=True, slots=True)
class SatpamOptions:
    """Per-resolver configuration, fixed at construction."""

    name: str = DEFAULT_COOKIE_NAME
    url_check: str = ""
    auto_set_cookie: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("cookie name must be non-empty")


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Attributes attached to a serialized Set-Cookie value."""

    domain: str | None = None
    path: str | None = None
    max_age: int | None = None
    expires: datetime | None = None
    same_site: SameSite | None = None
    secure: bool = False
    http_only: bool = False

    def __post_init__(self) -> None:
        if self.same_site is not None and self.same_site not in _SAME_SITE_VALUES:
            raise ValueError(f"same_site must be one of {sorted(_SAME_SITE_VALUES)}")
        if self.max_age is not None and self.max_age < 0:
            raise ValueError("max_age must be non-negative")


__all__ = [
    "DEFAULT_COOKIE_NAME",
    "CookieOptions",
    "SameSite",
    "SatpamOptions",
    "SatpamSession",
]
