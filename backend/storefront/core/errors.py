# storefront/core/errors.py
"""
Domain errors raised by services and their HTTP mapping.

Services never build HTTP responses; they raise one of these and the handlers
registered in `main.py` turn them into `{"detail": ...}` JSON bodies.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("storefront.errors")


class StoreError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    """A referenced entity (product, user, cart, cart item, order) is absent."""
    status_code = status.HTTP_404_NOT_FOUND


class InvalidArgumentError(StoreError):
    """Malformed quantity, status or shipping fields."""
    status_code = status.HTTP_400_BAD_REQUEST


class PermissionDeniedError(StoreError):
    """The caller may not touch another user's record."""
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(StoreError):
    """A conditional write lost against a concurrent change."""
    status_code = status.HTTP_409_CONFLICT


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return ", ".join(parts) or "Invalid request"


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _validation_message(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
