"""Demo FastAPI service that resolves satpam sessions on every request."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from satpam.config import SatpamSettings
from satpam.domain.session import SatpamSession
from satpam.integrations.fastapi import SatpamMiddleware, require_satpam_session
from satpam.observability.logging import configure_logging

logger = logging.getLogger("satpam.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    del app
    logger.info("satpam demo starting up")
    yield
    logger.info("satpam demo shutting down")


def create_app(settings: SatpamSettings | None = None) -> FastAPI:
    """Build the demo app; sessions come from the cookie or the URL fallback."""
    resolved_settings = settings or SatpamSettings()
    app = FastAPI(title="Satpam", version="0.1.0", lifespan=lifespan)
    app.add_middleware(SatpamMiddleware, settings=resolved_settings)

    @app.get("/healthz", tags=["health"], description="Service health check.")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/session", tags=["session"], description="Return the resolved session.")
    async def session(current: SatpamSession = Depends(require_satpam_session)) -> dict[str, object]:
        return {"status": current.status, "token": current.token}

    return app


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Satpam demo service.")
    parser.add_argument("--serve", action="store_true", help="Run the FastAPI app with uvicorn.")
    parser.add_argument(
        "--host",
        default=os.getenv("SATPAM_HOST", "127.0.0.1"),
        help="Host interface when serving the app.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("SATPAM_PORT", "8000")),
        help="Port when serving the app.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.serve:
        import uvicorn

        configure_logging()
        logger.info("starting uvicorn on %s:%s", args.host, args.port)
        uvicorn.run(create_app(), host=args.host, port=args.port, log_level="info")
    else:
        parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main()
