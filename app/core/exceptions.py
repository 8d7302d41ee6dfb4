"""
Custom exception handlers and error types
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging
import traceback
from typing import Optional

logger = logging.getLogger(__name__)


class MediaServiceError(Exception):
    """Base exception for the media upload service"""

    def __init__(self, message: str, error_code: "Optional[str]" = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class UploadError(MediaServiceError):
    """Exception raised when the Cloudinary upload call fails
    Args:
        message (str): Error message
        local_path (Optional[str]): Local file that was being uploaded
    Example:
        raise UploadError("Invalid api_key", local_path="/tmp/photo.png")
    """

    def __init__(self, message: str, local_path: Optional[str] = None):
        super().__init__(message, "UPLOAD_ERROR")
        self.local_path = local_path


class CleanupError(MediaServiceError):
    """Exception raised when a local file cannot be removed"""

    def __init__(self, message: str, local_path: Optional[str] = None):
        super().__init__(message, "CLEANUP_ERROR")
        self.local_path = local_path


class ConfigurationError(MediaServiceError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


class FileValidationError(Exception):
    """Custom exception for file validation errors"""

    def __init__(
        self, message: str, file_name: Optional[str] = None, status_code: int = 400
    ):
        self.message = message
        self.file_name = file_name
        self.status_code = status_code
        super().__init__(self.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning("Validation error: %s", exc.errors())
    return JSONResponse(
        status_code=422,
        content={
            "detail": {
                "error": "Validation error",
                "details": "Invalid request data",
                "errors": exc.errors(),
            }
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format"""
    logger.warning("HTTP exception: %s - %s", exc.status_code, exc.detail)

    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"error": "HTTP Error", "details": str(exc.detail)}

    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def media_service_exception_handler(request: Request, exc: MediaServiceError):
    """Handle media service errors that escaped the use case"""
    logger.error("Media service error: %s", exc.message)
    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Media service failure",
                "details": exc.message,
                "error_code": exc.error_code,
            }
        },
    )


async def file_validation_exception_handler(request: Request, exc: FileValidationError):
    """Handle file validation errors"""
    logger.warning("File validation error: %s (file: %s)", exc.message, exc.file_name)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": {
                "error": "File validation failed",
                "details": exc.message,
                "file_name": exc.file_name,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.error("Unexpected error: %s: %s", type(exc).__name__, exc)
    logger.error("Traceback: %s", traceback.format_exc())

    return JSONResponse(
        status_code=500,
        content={
            "detail": {
                "error": "Internal server error",
                "details": "An unexpected error occurred",
            }
        },
    )
