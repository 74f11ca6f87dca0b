"""Tutorials REST API — FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tutorialsapi import __version__
from tutorialsapi.api.deps import create_session_factory
from tutorialsapi.api.errors import register_error_handlers
from tutorialsapi.api.middleware.request_id import RequestIDMiddleware
from tutorialsapi.api.routers import tutorials
from tutorialsapi.core.config import Settings
from tutorialsapi.core.database import Base
from tutorialsapi.core.logging import setup_logging
from tutorialsapi.dao.tutorial_dao import TutorialDAO
from tutorialsapi.services.tutorial_service import TutorialService

log = structlog.get_logger("tutorialsapi")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create engine (and table). Shutdown: dispose engine."""
    settings: Settings = app.state.settings
    engine, factory = create_session_factory(settings.database_url)
    if settings.create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    app.state.session_factory = factory
    log.info("tutorials api started", database=engine.url.render_as_string(hide_password=True))
    yield
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Tutorials API",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=_lifespan,
    )
    app.state.settings = settings
    app.state.tutorial_service = TutorialService(TutorialDAO())

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(tutorials.router, prefix="/api/tutorials", tags=["tutorials"])

    return app
