"""
Main FastAPI application entry point.

Initializes the FastAPI application, wires middleware, exception
handlers and the v1 routers, and releases pooled connections on
shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from otp_guard.core.config import settings
from otp_guard.core.container import get_database, get_logger, get_redis
from otp_guard.presentation.api.middleware.trace_middleware import TraceMiddleware
from otp_guard.presentation.routers.api.v1 import v1_router
from otp_guard.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: log configuration summary
    - Shutdown: dispose database pool and close Redis (only if created)

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    logger.info(
        "application_starting",
        environment=settings.environment.value,
        challenge_store_backend=settings.challenge_store_backend,
        reset_token_backend=settings.reset_token_backend,
        identity_provider_backend=settings.identity_provider_backend,
    )

    yield

    if get_database.cache_info().currsize:
        await get_database().close()
    if get_redis.cache_info().currsize:
        await get_redis().aclose()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="One-time passcode issuance, verification and password reset",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

# Include API v1 routers
app.include_router(v1_router)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint - basic health check.

    Returns:
        dict: Welcome message with API status.
    """
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        dict: Health status indicator.
    """
    return {"status": "healthy"}
