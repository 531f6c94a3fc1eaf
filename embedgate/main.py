"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, embeds, utility files)
- Error pipeline (centralized failure-to-HTTP mapping)
- Response cache, origin policy and product header middleware
- Logging configuration and the uncaught-failure guard

No business logic belongs here.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from embedgate.core.config import Settings, get_settings
from embedgate.domain.embeds.ports import EmbedResolver
from embedgate.interfaces import files
from embedgate.interfaces.embeds.router import router as embeds_router
from embedgate.interfaces.health import router as health_router
from embedgate.shared.caching.middleware import ResponseCacheMiddleware
from embedgate.shared.caching.store import ResponseCache
from embedgate.shared.caching.writer import CachedResponseWriter
from embedgate.shared.errors.handlers import ErrorPipeline, register_error_handlers
from embedgate.shared.logging import configure_logging
from embedgate.shared.security.headers import ProductHeaderMiddleware
from embedgate.shared.security.origin_policy import OriginPolicy, OriginPolicyMiddleware
from embedgate.shared.supervisor import UncaughtFailureGuard

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: announce startup, guard the event loop."""
    settings: Settings = app.state.settings

    logger.info("Starting Iframely...")
    logger.info(
        "Base URL for embeds that require hosted renders: %s", settings.base_app_url
    )
    if not settings.base_app_url:
        logger.warning("Warning: base_app_url not set, default value used")

    app.state.guard.install(asyncio.get_running_loop())

    yield

    logger.info("Iframely shutting down")


def create_app(
    settings: Optional[Settings] = None,
    embed_resolver: Optional[EmbedResolver] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root: configuration is read once here and
    passed to every component that needs it.

    Args:
        settings: Explicit settings; the process defaults when omitted.
        embed_resolver: Adapter behind GET /iframely.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    cache = ResponseCache()
    writer = CachedResponseWriter(cache)
    app.state.settings = settings
    app.state.response_cache = cache
    app.state.response_writer = writer
    app.state.embed_resolver = embed_resolver
    app.state.guard = UncaughtFailureGuard(debug=settings.debug)

    # --- Error Pipeline (innermost) ---
    register_error_handlers(app, ErrorPipeline(settings, writer))

    # --- Response Cache ---
    app.add_middleware(ResponseCacheMiddleware, cache=cache)

    # --- Headers (outermost, so cache hits and errors get them too) ---
    if settings.allowed_origins is not None:
        app.add_middleware(
            OriginPolicyMiddleware, policy=OriginPolicy(settings.allowed_origins)
        )
    app.add_middleware(ProductHeaderMiddleware)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(embeds_router)
    app.include_router(files.router)

    if not settings.testing and os.path.isdir(settings.static_directory):
        app.mount(
            settings.relative_static_url,
            StaticFiles(directory=settings.static_directory),
            name="static",
        )

    return app
