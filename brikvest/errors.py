"""
brikvest/errors.py

Domain error taxonomy and the FastAPI handlers that turn it into HTTP responses.

Services raise these exceptions; routes never build HTTPException for
business failures themselves. Every error carries its HTTP status code and a
client-safe message. Unexpected exceptions are logged with their traceback and
answered with a generic 500.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BrikvestError(Exception):
    """Base class for every error the API reports to clients."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BrikvestError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid data provided"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.details = details or []


class NotFoundError(BrikvestError):
    status_code = 404
    default_message = "Not found"


class BusinessRuleError(BrikvestError):
    """A well-formed request that the current state does not allow."""
    status_code = 400
    default_message = "Request not allowed"


class InsufficientSlotsError(BusinessRuleError):
    default_message = "Not enough available slots"


class OvercommitError(BusinessRuleError):
    default_message = "Group has reached its member limit"


class GroupClosedError(BusinessRuleError):
    default_message = "Group is not accepting members or contributions"


class InvalidStatusTransitionError(BusinessRuleError):
    default_message = "Status transition not allowed"


class AuthenticationError(BrikvestError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class UnauthenticatedError(AuthenticationError):
    default_message = "Authentication required"


class SessionExpiredError(AuthenticationError):
    default_message = "Session expired"


class AuthorizationError(BrikvestError):
    status_code = 403
    default_message = "Insufficient permissions"


ForbiddenError = AuthorizationError


class InternalError(BrikvestError):
    status_code = 500


# ---------------------------------------------------------
# FastAPI handlers
# ---------------------------------------------------------
async def _handle_brikvest_error(request: Request, exc: BrikvestError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[API] %s %s failed: %s", request.method, request.url.path, exc.message)
        body = {"detail": BrikvestError.default_message}
    else:
        body = {"detail": exc.message}
        if isinstance(exc, ValidationError) and exc.details:
            body["details"] = exc.details

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Field-level detail without echoing raw input back
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": ValidationError.default_message, "details": details},
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[API] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": BrikvestError.default_message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BrikvestError, _handle_brikvest_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
