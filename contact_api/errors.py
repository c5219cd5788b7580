"""Error kinds raised by the store and service layers.

Each error carries the HTTP status it maps to, so route handlers never
translate errors themselves; ``register_exception_handlers`` installs
the FastAPI handlers that render them.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ContactAPIError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ContactAPIError):
    """A contact or photo file does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ContactValidationError(ContactAPIError):
    """Input violates a contact or photo constraint."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ContactAPIError):
    """A unique constraint (contact email) would be violated."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(ContactAPIError):
    """Database or filesystem failure not otherwise classified."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def contact_api_error_handler(request: Request, exc: ContactAPIError):
    """Render a ``ContactAPIError`` as ``{"detail": ...}`` with its status."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    """Report malformed request bodies and parameters as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error-to-status mapping on the application."""
    app.add_exception_handler(ContactAPIError, contact_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
