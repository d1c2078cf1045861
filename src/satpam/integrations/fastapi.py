"""FastAPI/Starlette glue: one resolver per request plus route dependencies."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from satpam.config import SatpamSettings
from satpam.domain.session import SatpamSession
from satpam.resolver import Satpam, VerifyHook
from satpam.sinks import CaptureCookieSink

logger = logging.getLogger(__name__)

SESSION_STATE_KEY = "satpam_session"


class SatpamMiddleware(BaseHTTPMiddleware):
    """Resolve the session token before the route runs.

    The resolved session is exposed as ``request.state.satpam_session`` and
    any cookie staged by the resolver is appended to the outgoing response.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: SatpamSettings | None = None,
        hook: VerifyHook | None = None,
    ) -> None:
        super().__init__(app)
        self._settings = settings or SatpamSettings()
        self._hook = hook

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        sink = CaptureCookieSink()
        resolver = Satpam(
            request,
            options=self._settings.to_options(),
            sink=sink,
            cookie_options=self._settings.cookie_options(),
        )
        session = await resolver.verify(self._hook)
        setattr(request.state, SESSION_STATE_KEY, session)
        logger.debug(
            "satpam_session_resolved",
            extra={
                "data": {
                    "path": request.url.path,
                    "status": session.status,
                    "cookie_staged": bool(sink.cookies),
                }
            },
        )

        response = await call_next(request)
        for cookie in sink.cookies:
            response.headers.append("set-cookie", cookie)
        return response


def get_satpam_session(request: Request) -> SatpamSession:
    session = getattr(request.state, SESSION_STATE_KEY, None)
    if isinstance(session, SatpamSession):
        return session
    return SatpamSession.empty()


async def require_satpam_session(
    session: SatpamSession = Depends(get_satpam_session),
) -> SatpamSession:
    if not session.status:
        raise HTTPException(status_code=401, detail="missing satpam session")
    return session


__all__ = [
    "SESSION_STATE_KEY",
    "SatpamMiddleware",
    "get_satpam_session",
    "require_satpam_session",
]
