import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    """Base class for failures raised by the resource stores."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ResourceError):
    """A required field is missing or a value cannot be stored."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ResourceError):
    """A unique field value is already taken by another record."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ResourceError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(ResourceError):
    """The key-value store failed or is unreachable."""


async def resource_error_handler(request: Request, exc: ResourceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def store_error_handler(request: Request, exc: StoreError):
    # Store details are logged, never returned to the client
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": "Internal storage error"},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request"},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(ResourceError, resource_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
