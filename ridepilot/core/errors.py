"""Domain errors raised by the driver routes and mapped to HTTP responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """Base class for errors surfaced to the driver as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(PortalError):
    """A required field was missing or blank."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredential(PortalError):
    """No driver matches the login code, or the PIN is wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidOrExpiredToken(PortalError):
    """The token does not belong to any active driver."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamFailure(PortalError):
    """The hosted data store returned an error."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are reported as 400, like a missing field."""
    logger.warning(f"Rejected malformed request to {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
