"""Main FastAPI application."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from outage_journal.api.v1.router import api_router
from outage_journal.core.config import get_settings
from outage_journal.core.database import close_db, init_db
from outage_journal.core.exceptions import add_exception_handlers
from outage_journal.core.middleware import add_middleware

logger = structlog.get_logger()

VERSION = "0.1.0"


def _testing() -> bool:
    return os.getenv("TESTING", "false").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up application")

    await init_db()

    yield

    await close_db()
    logger.info("Shutting down application")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # Tests create their own schema
    lifespan_context = None if _testing() else lifespan

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Outage journal and reporting API",
        version=VERSION,
        openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan_context,
        redirect_slashes=False,
    )

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    add_middleware(app)

    if settings.ALLOWED_HOSTS:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=settings.ALLOWED_HOSTS,
        )

    add_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {"message": "Outage Journal API", "version": VERSION, "status": "healthy"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint with database connectivity test."""
        from sqlalchemy import text

        from outage_journal.core.database import get_session_factory

        try:
            AsyncSessionLocal = get_session_factory()
            async with AsyncSessionLocal() as db:
                await db.execute(text("SELECT 1"))

            return {
                "status": "healthy",
                "database": "connected",
            }
        except Exception as e:
            logger.error("Health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "database": "error",
                "error": str(e),
            }

    return app


app = create_application()
