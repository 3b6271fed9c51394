"""
FastAPI application entry point for the RidePilot driver portal.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ridepilot.api import api_router
from ridepilot.core.config import get_settings
from ridepilot.core.errors import register_exception_handlers
from ridepilot.db.database import create_session_maker, create_store_engine

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Opens the engine for the hosted store on startup and disposes it on
    shutdown.
    """
    settings = get_settings()
    engine = create_store_engine(settings)
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    logger.info(f"Connected to data store at {engine.url.host}")
    yield
    await engine.dispose()


def create_application() -> FastAPI:
    """Create and configure FastAPI application.

    Fails at startup when the data store URL or service key is missing.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="""
        ## RidePilot Driver Portal

        Driver-facing API for the dispatch product:

        - **PIN login** and **magic-link token** authentication
        - **Token rotation** to revoke a shared link
        - **Trip listing** of a driver's active assignments
        """,
        version=settings.app_version,
        openapi_url=f"{API_PREFIX}/openapi.json",
        docs_url=f"{API_PREFIX}/docs",
        redoc_url=f"{API_PREFIX}/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=API_PREFIX)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": f"{API_PREFIX}/docs",
            "openapi": f"{API_PREFIX}/openapi.json",
        }

    return app


# Create application instance
app = create_application()
