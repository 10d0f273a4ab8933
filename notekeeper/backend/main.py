"""
Notekeeper FastAPI application.

    uvicorn notekeeper.backend.main:app

``app`` is created lazily on first attribute access so that importing this
module does not read configuration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notekeeper.backend.api import health
from notekeeper.backend.api.v1 import router as api_v1_router
from notekeeper.backend.core.config import get_app_config
from notekeeper.backend.core.database import dispose_engine
from notekeeper.backend.core.exception_handlers import register_exception_handlers
from notekeeper.backend.core.logging import get_logger, setup_logging
from notekeeper.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup; release the connection pool on shutdown."""
    app_config = get_app_config()
    setup_logging(config=app_config.logging)
    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "version": app_config.application.version,
            "env": app_config.application.environment,
        },
    )

    yield

    await dispose_engine()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """Build the app: middleware, error handlers, health and /api/v1 routers."""
    app_config = get_app_config()
    settings = app_config.application

    app = FastAPI(
        title=settings.name,
        description=settings.description,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_config.features.api_request_logging,
    )
    if settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix="/api/v1")
    return app


def get_app() -> FastAPI:
    """Return the process-wide app, creating it on first call."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
