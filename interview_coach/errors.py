"""
Error taxonomy for the Interview Coach backend.

Domain code raises these; the FastAPI handlers registered in ``main`` turn them
into JSON responses. Anything that is not an ``AppError`` is treated as an
internal failure and reported without detail.
"""
import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all application errors."""
    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppError):
    """A session, document or feedback record does not exist."""
    status_code = 404


class ForbiddenError(AppError):
    """The requesting user does not own the resource."""
    status_code = 403


class InvalidStateError(AppError):
    """The resource exists but is not in a state that allows the operation."""
    status_code = 400


class ConflictError(AppError):
    """A uniqueness rule was violated (e.g. feedback already exists)."""
    status_code = 409


class ExternalServiceDegradedError(AppError):
    """The LLM collaborator failed and the operation has no fallback."""
    status_code = 502


class LlmOutputError(ValueError):
    """LLM text could not be turned into the expected JSON payload."""


# ============================================================================
# FastAPI Exception Handlers
# ============================================================================

async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )
