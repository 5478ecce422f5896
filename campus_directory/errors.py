"""
Error taxonomy for the directory service and the FastAPI handlers that turn
those errors into JSON bodies.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Base class for every failure the API reports to its callers."""

    status_code: int = 500
    error: str = "InternalError"
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class ValidationError(DirectoryError):
    """A required field is missing or malformed. Correctable by the caller."""
    status_code = 400
    error = "ValidationError"


class NotFound(DirectoryError):
    """A referenced parent entity does not exist."""
    status_code = 404
    error = "NotFound"


class InvalidCredentials(DirectoryError):
    """Login details did not match any student. The message stays generic."""
    status_code = 401
    error = "InvalidCredentials"


class UpstreamUnavailable(DirectoryError):
    """The backing store could not be reached in time."""
    status_code = 503
    error = "UpstreamUnavailable"
    retryable = True


class InternalError(DirectoryError):
    """Unexpected failure, e.g. malformed stored JSON."""
    status_code = 500
    error = "InternalError"


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc looks like ("body", "name"); a bare ("body",) means the body itself is missing/invalid
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field: Optional[str] = ".".join(loc) if loc else None
    if field is None:
        return "Request body must be a JSON object"
    if first.get("type") == "missing":
        return f"{field} is required"
    msg = first.get("msg", "is invalid")
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    return f"{field}: {msg}"


# Routes whose clients expect the ``{status, message, data}`` envelope on every outcome
ENVELOPE_PATHS = ("/api/login",)


def envelope_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message, "data": None},
    )


def _error_response(request: Request, error: DirectoryError) -> JSONResponse:
    if request.url.path.rstrip("/") in ENVELOPE_PATHS:
        return envelope_error(error.status_code, error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the app."""

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(_first_validation_message(exc))
        logger.info(f"Rejected {request.method} {request.url.path}: {error.message}")
        return _error_response(request, error)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        return _error_response(request, InternalError("Internal server error"))
