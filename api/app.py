"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.database import init_supabase_client, reset_client_cache
from modules.auth.routes import router as auth_router
from modules.notifications import init_notifier, shutdown_notifier
from modules.quizzes.routes import router as quizzes_router

from .errors import register_exception_handlers
from .middleware.rate_limit import RateLimitMiddleware
from .routes import health, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Opens the store client and the mail transport once per process and
    releases them on shutdown.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)

    if settings.supabase_url and settings.supabase_service_role_key:
        await init_supabase_client()
    else:
        logger.warning("Supabase is not configured; store-backed routes will fail")

    init_notifier(settings)

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.app_name)
    await shutdown_notifier()
    reset_client_cache()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Multi-user quiz API: accounts, quiz CRUD and play",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RateLimitMiddleware)

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, tags=["auth"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(quizzes_router, prefix="/resource", tags=["quizzes"])

    return app


# Application instance for uvicorn
app = create_app()
