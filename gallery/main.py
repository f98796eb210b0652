"""
FastAPI application for the gallery access layer.

Configures:
- Database lifecycle and configuration defaults
- Logging and request logging middleware
- Exception handlers
- Prometheus metrics endpoint
- API routers
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from gallery.config import get_settings
from gallery.database import close_db, get_db_context, init_db
from gallery.exceptions import ConfigurationError
from gallery.middlewares.logging_middleware import LoggingMiddleware
from gallery.routers import albums_router, health_router, search_router
from gallery.services.config_store import ConfigStore
from gallery.utils.logger import get_request_id, setup_logging
from gallery.utils.metrics import config_errors_total, exceptions_total

settings = get_settings()
logger = logging.getLogger("gallery")

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Create tables and seed missing settings, dispose the engine on shutdown."""
    await init_db()
    async with get_db_context() as db:
        await ConfigStore(db).ensure_defaults()
    logger.info(
        "Application startup completed",
        extra={
            "event": "lifecycle",
            "version": settings.app_version,
            "environment": settings.environment.value,
        },
    )
    
    yield
    
    await close_db()
    logger.info("Application shutdown completed", extra={"event": "lifecycle"})


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
Visibility layer of the photo gallery.

- **Albums**: albums the caller may see, with effective download / full photo flags
- **Search**: photo search limited to visible albums and unsorted or public photos

Authentication is optional: send a Bearer token to act as a user,
omit it to browse anonymously.
    """,
    openapi_tags=[
        {"name": "Albums", "description": "Visible albums and album tree"},
        {"name": "Search", "description": "Photo search"},
        {"name": "Health", "description": "Liveness"},
    ],
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.mount("/metrics", make_asgi_app())


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """A broken setting never falls back to showing content."""
    config_errors_total.labels(key=exc.key).inc()
    rid = get_request_id()
    logger.error(
        "Configuration error",
        extra={
            "event": "config",
            "key": exc.key,
            "error": str(exc),
            "http_path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Gallery configuration error", "request_id": rid},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions and answer 500 with the request id."""
    exceptions_total.inc()
    rid = get_request_id()
    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "event": "exception",
            "error_type": type(exc).__name__,
            "http_method": request.method,
            "http_path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "request_id": rid},
    )


app.include_router(health_router)
app.include_router(albums_router)
app.include_router(search_router)


@app.get("/", tags=["Root"], summary="API information")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
