import os
import asyncio
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, APIRouter
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from contextlib import asynccontextmanager

from app.core.exceptions import (
    ConfigurationError,
    FileValidationError,
    MediaServiceError,
    file_validation_exception_handler,
    general_exception_handler,
    http_exception_handler,
    media_service_exception_handler,
    validation_exception_handler,
)
from app.core.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
)
from app.presentation.api.v1.routers import media
from app.presentation.api.v1.routers import health
from app.core.config import CloudinaryCredentials, Settings, settings
from utils.resource_manager import sweep_stale_uploads


def configure_logging(config: Settings) -> None:
    """Log to console and to a rotating file."""
    log_handlers = [logging.StreamHandler()]
    if config.log_file:
        log_dir = os.path.dirname(config.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                config.log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=config.log_format,
        datefmt=config.log_date_format,
        handlers=log_handlers,
    )


configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Media Upload API...")

    credentials = CloudinaryCredentials.from_settings(settings)
    app.state.cloudinary_credentials = credentials
    try:
        credentials.require_configured()
        logger.info("Cloudinary account: %s", credentials.cloud_name)
    except ConfigurationError as e:
        logger.warning("%s; uploads will fail. Config: %s", e.message, credentials.masked())

    if settings.sweep_on_startup:
        await asyncio.to_thread(
            sweep_stale_uploads,
            settings.upload_temp_dir,
            settings.stale_upload_max_age_hours,
        )

    yield
    logger.info("Shutting down Media Upload API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        calls=settings.max_requests_per_minute,
        period=60,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MediaServiceError, media_service_exception_handler)
    app.add_exception_handler(FileValidationError, file_validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(media.router, tags=["media"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


# Create application instance
app = create_application()

if __name__ == "__main__":
    dev_mode = os.getenv("DEV_MODE", "true").lower() == "true"
    uvicorn.run(
        "app.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )
