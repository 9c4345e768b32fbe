import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto a client-visible status code"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class EmailAlreadyRegistered(ConflictError):
    # Existing clients expect 400 for a duplicate registration
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class InsufficientSeats(ConflictError):
    default_message = "Not enough seats available"


class TransactionError(AppError):
    """A multi-statement unit of work failed and was rolled back.

    ``stage`` names the step that failed (insert, status_update, seat_update,
    commit, deadline). It is logged for diagnostics and never sent to the client.
    """

    default_message = "Transaction failed"

    def __init__(self, message: Optional[str] = None, stage: str = "unknown"):
        self.stage = stage
        super().__init__(message)


class StoreError(AppError):
    default_message = "Database error occurred"


def _error_body(message: str) -> dict:
    return {"success": False, "message": message}


async def app_error_handler(request: Request, exc: AppError):
    if isinstance(exc, TransactionError):
        logger.error("%s %s: transaction failed at stage=%s: %s",
                     request.method, request.url.path, exc.stage, exc.message,
                     exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=_error_body("Transaction failed"))
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Malformed JSON body"),
        )

    fields = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields.append({"field": ".".join(loc), "error": error.get("msg")})
    names = [f["field"] for f in fields if f["field"]]
    message = f"Invalid or missing fields: {', '.join(names)}" if names else ValidationError.default_message
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={**_error_body(message), "errors": fields},
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(StoreError.default_message),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(AppError.default_message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
