"""Per-request token resolution across cookies, URL parameters and a hook.

A ``Satpam`` instance belongs to exactly one request. The hook is passed to
``verify`` and never stored, so only the final session and token live on the
instance; sharing one resolver between concurrent requests is still
unsupported because those two fields would be overwritten.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal, TypeAlias

from satpam.cookies import parse_cookies, serialize_cookie
from satpam.domain.session import CookieOptions, SatpamOptions, SatpamSession
from satpam.sinks import CookieSink, HeaderCookieSink
from satpam.url_params import find_url_token

logger = logging.getLogger(__name__)

HookResult: TypeAlias = str | None
VerifyHook: TypeAlias = Callable[[str], HookResult | Awaitable[HookResult]]
TokenSource = Literal["cookie", "query", "fragment", "none"]


class Satpam:
    """Locate a session token for one request and write it back as a cookie."""

    def __init__(
        self,
        request: Any,
        response: Any = None,
        options: SatpamOptions | None = None,
        *,
        sink: CookieSink | None = None,
        cookie_options: CookieOptions | None = None,
    ) -> None:
        self._request = request
        self._response = response
        self._options = options or SatpamOptions()
        self._sink = sink if sink is not None else _default_sink(response)
        self._cookie_options = cookie_options
        self._token = ""
        self._session = SatpamSession.empty()

    @property
    def options(self) -> SatpamOptions:
        return self._options

    async def verify(self, hook: VerifyHook | None = None) -> SatpamSession:
        """Resolve the request's token, run ``hook`` over it and store the session."""
        candidate, source = self._locate_token()
        logger.debug(
            "token candidate located",
            extra={"data": {"source": source, "cookie_name": self._options.name}},
        )
        session = await self._process_token(candidate, hook)
        self._session = session
        return session

    def set_session(
        self,
        token: str | None = None,
        options: CookieOptions | None = None,
    ) -> str | None:
        """Serialize ``token`` as the session cookie and persist it.

        ``token`` defaults to the last resolved token and ``options`` to the
        resolver's cookie options. Returns ``None`` without side effects when
        there is nothing to persist.
        """
        resolved = self._token if token is None else token
        if not resolved:
            return None

        cookie = serialize_cookie(
            self._options.name,
            resolved,
            options if options is not None else self._cookie_options,
        )
        if self._sink is None:
            logger.debug(
                "no cookie sink available; returning cookie without persisting",
                extra={"data": {"cookie_name": self._options.name}},
            )
        else:
            self._sink.persist(cookie)

        # Session state only changes once the cookie has been written.
        self._token = resolved
        self._session = SatpamSession.resolved(resolved)
        return cookie

    def get_session(self) -> SatpamSession:
        return self._session

    def _locate_token(self) -> tuple[str, TokenSource]:
        headers = getattr(self._request, "headers", None)
        cookies = parse_cookies(_header_value(headers, "cookie"))
        cookie_token = cookies.get(self._options.name, "")
        if cookie_token:
            return cookie_token, "cookie"

        if not self._options.url_check:
            return "", "none"
        url = getattr(self._request, "url", None)
        if not url:
            return "", "none"

        match = find_url_token(url, self._options.url_check)
        if match is None:
            return "", "none"
        return match.token, match.source

    async def _process_token(self, candidate: str, hook: VerifyHook | None) -> SatpamSession:
        token = candidate
        if hook is not None:
            result = await _call_hook(hook, candidate)
            if isinstance(result, str) and result:
                if result != candidate:
                    logger.debug(
                        "hook supplied token",
                        extra={"data": {"minted": candidate == "", "cookie_name": self._options.name}},
                    )
                token = result

        if not token:
            self._token = ""
            return SatpamSession.empty()

        if self._options.auto_set_cookie:
            self.set_session(token)
        else:
            self._token = token
        return SatpamSession.resolved(token)


async def _call_hook(hook: VerifyHook, candidate: str) -> HookResult:
    result = hook(candidate)
    if inspect.isawaitable(result):
        return await result
    return result


def _header_value(headers: Any, name: str) -> str | None:
    if headers is None:
        return None
    if isinstance(headers, Mapping):
        value = headers.get(name)
        if value is not None:
            return value
        for key, item in headers.items():
            if isinstance(key, str) and key.lower() == name:
                return item
        return None
    getter = getattr(headers, "get", None)
    if callable(getter):
        return getter(name)
    return None


def _default_sink(response: Any) -> CookieSink | None:
    headers = getattr(response, "headers", None)
    if headers is None or isinstance(headers, (str, bytes, int, float, bool)):
        return None
    return HeaderCookieSink(headers)


__all__ = ["HookResult", "Satpam", "TokenSource", "VerifyHook"]
