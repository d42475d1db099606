"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging and stores the active
:class:`~blankscan.config.Settings` on ``app.state.settings`` so routes (and
tests) share one place to read or override configuration.

Routers
-------
    /api/scan  — batch blank-page scan
    /health    — liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blankscan.config import Settings, settings as default_settings
from blankscan.logging_config import configure_logging

from blankscan.api.routers import scan as scan_router

_INVALID_INPUT = 'Invalid input. "urls" must be an array of strings.'


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as HTTP 400 with a flat error payload."""
    return JSONResponse(
        {"error": _INVALID_INPUT, "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    cfg = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(cfg.log_level)
        yield

    app = FastAPI(
        title="Blank Page Scanner API",
        description=(
            "Bulk link-health auditing: follows each URL's redirect chain and "
            "reports whether the final page is effectively blank."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _invalid_request)

    app.include_router(scan_router.router, prefix="/api", tags=["scan"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn blankscan.api.app:app --reload
app = create_app()
