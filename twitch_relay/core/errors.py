"""Error taxonomy and its mapping onto HTTP responses.

Every failure a request can hit is raised as a ``RelayError`` subclass and
rendered by the handlers below as ``{"error": message}`` with the
matching status code. Provider payloads stay in the logs.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, payload: Any = None):
        self.message = message or self.default_message
        self.payload = payload
        super().__init__(self.message)


class AuthError(RelayError):
    """Application token could not be obtained from the identity provider."""

    status_code = 503
    default_message = "Twitch authentication failed, check the client credentials"


class ServiceUnavailable(RelayError):
    status_code = 503
    default_message = "Could not obtain a Twitch token, try again later"


class BadRequest(RelayError):
    status_code = 400
    default_message = "Bad request"


class UpstreamError(RelayError):
    """A Twitch call failed after the token was presumed valid."""

    status_code = 500
    default_message = "Twitch request failed"


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": "Malformed request body"}, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse({"error": RelayError.default_message}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on *app*"""
    app.add_exception_handler(RelayError, relay_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
