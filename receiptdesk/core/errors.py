# receiptdesk/core/errors.py
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from receiptdesk.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base error carrying the HTTP status and the JSON error body."""

    status_code = 500

    def __init__(
        self,
        error: str,
        details: Optional[str] = None,
        missing_fields: Optional[List[str]] = None,
    ):
        super().__init__(error)
        self.error = error
        self.details = details
        self.missing_fields = missing_fields

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        if self.missing_fields:
            body["missingFields"] = list(self.missing_fields)
        return body


class AuthError(AppError):
    status_code = 401


class ValidationError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 409


class NotFoundError(AppError):
    status_code = 404


class DependencyError(AppError):
    status_code = 503


class InternalError(AppError):
    status_code = 500


class ReceiptValidationError(ValidationError):
    """Raised with every offending field path of a receipt draft at once."""

    def __init__(self, field_errors: Dict[str, str], error: str = "Invalid receipt"):
        super().__init__(error)
        self.field_errors = dict(field_errors)

    def to_body(self) -> dict:
        body = super().to_body()
        body["fieldErrors"] = self.field_errors
        return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError("Invalid request body", details=describe_errors(exc.errors()))
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s database error: %s", request.method, request.url.path, exc)
    err = DependencyError("Database error occurred", details=str(exc.__class__.__name__))
    return JSONResponse(status_code=err.status_code, content=err.to_body())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path)
    err = InternalError("Internal server error", details=str(exc) or None)
    return JSONResponse(status_code=err.status_code, content=err.to_body())


def describe_errors(errors) -> str:
    """Flatten pydantic error dicts into ``path: message`` pairs."""
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        path = ".".join(loc)
        parts.append(f"{path}: {error.get('msg')}" if path else str(error.get("msg")))
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
