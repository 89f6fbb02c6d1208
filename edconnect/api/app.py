# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the EdConnect API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from edconnect import __version__
from edconnect.api.middleware.auth import AuthMiddleware
from edconnect.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from edconnect.api.middleware.request_context import RequestContextMiddleware
from edconnect.api.routes import health
from edconnect.api.v1 import router as v1_router
from edconnect.core.config import get_settings
from edconnect.infrastructure.database.connection import (
    close_database,
    create_all_tables,
    get_session,
    init_database,
)
from edconnect.infrastructure.database.seed import seed_if_empty
from edconnect.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes and cleans up:
    - Database connection pool
    - Tables for SQLite databases (PostgreSQL uses Alembic)
    - Demo data when the database has no users

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting EdConnect API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    # =========================================================================
    # Startup
    # =========================================================================

    # A database failure here is fatal; the API has nothing to serve without it
    await init_database(settings)
    logger.info("Database connection initialized")

    if settings.database.is_sqlite:
        await create_all_tables()
        logger.info("SQLite tables created")

    if settings.seed.enabled:
        try:
            async with get_session() as session:
                if await seed_if_empty(session):
                    logger.info("Demo data seeded")
        except Exception as e:
            logger.warning("Failed to seed demo data: %s", str(e))

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await close_database()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down EdConnect API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="EdConnect API",
        description="Role-based education management backend",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        # This prevents 307 redirects that lose Authorization headers
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    # Auth middleware - validates JWT tokens
    app.add_middleware(AuthMiddleware)

    # Request context - binds request id into structlog for the whole request
    app.add_middleware(RequestContextMiddleware)

    # CORS middleware (added last so it runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"name": "EdConnect API", "version": __version__}

    return app
