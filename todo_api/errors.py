import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class StartupError(RuntimeError):
    """Required configuration is missing or invalid."""


class AppError(Exception):
    """Base for errors that map onto an HTTP response.

    ``kind`` is the stable machine-readable code returned to clients,
    ``message`` the human-readable text.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "server_error"
    message = "Server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation_error"
    message = "Invalid request"


class DuplicateUser(ValidationError):
    kind = "duplicate_user"
    message = "User already exists"


class UnknownEmail(ValidationError):
    kind = "unknown_email"
    message = "Invalid email"


class WrongPassword(ValidationError):
    kind = "wrong_password"
    message = "Invalid password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthenticated"
    message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(Unauthenticated):
    kind = "invalid_token"
    message = "Invalid token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"
    message = "Todo not found"


class PersistenceError(AppError):
    kind = "persistence_error"


class PasswordHashError(AppError):
    kind = "hashing_error"


def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "message": exc.message},
        headers=exc.headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.kind, exc_info=exc
        )
    return error_response(exc)


async def persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "datastore error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(PersistenceError())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(SQLAlchemyError, persistence_error_handler)
