"""
Error types and the JSON envelope every error response is rendered with.

    {"success": false, "error": {"code": 404, "message": "...", "details": ...}}
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from beacon.core.logging import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = 'Route not found'
UNPROCESSABLE_MESSAGE = 'Unprocessable entity'
UNPROCESSABLE_DETAILS = 'The request was well-formed but unable to be processed.'
INTERNAL_ERROR_MESSAGE = 'Internal server error'
INTERNAL_ERROR_DETAILS = 'Something went wrong on our end. Please try again later.'


class ErrorBody(BaseModel):
    code: int = Field(..., description='HTTP status code')
    message: str = Field(..., description='Human readable error message')
    details: Any = Field(None, description='Optional error details')


class ErrorEnvelope(BaseModel):
    """Standard API error response."""

    success: bool = False
    error: ErrorBody


class AppError(Exception):
    """Base application error rendered with the standard envelope."""

    def __init__(
        self, status_code: int, message: str, details: Any | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


def route_not_found_details(path: str) -> str:
    return f"The route '{path}' does not exist"


def error_response(
    status_code: int,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorBody(code=status_code, message=message, details=details)
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope),
        headers=headers,
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.bind(status_code=exc.status_code, path=request.url.path).warning(
            exc.message
        )
        return error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == HTTPStatus.NOT_FOUND:
            return error_response(
                exc.status_code,
                NOT_FOUND_MESSAGE,
                route_not_found_details(request.url.path),
                headers=exc.headers,
            )

        try:
            message = HTTPStatus(exc.status_code).phrase
        except ValueError:
            message = str(exc.detail)
        details = exc.detail if exc.detail != message else None
        return error_response(exc.status_code, message, details, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.bind(path=request.url.path).info('request validation failed')
        return error_response(
            HTTPStatus.UNPROCESSABLE_ENTITY.value,
            UNPROCESSABLE_MESSAGE,
            jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.bind(path=request.url.path).opt(exception=exc).error(
            'unhandled exception'
        )
        return error_response(
            HTTPStatus.INTERNAL_SERVER_ERROR.value,
            INTERNAL_ERROR_MESSAGE,
            INTERNAL_ERROR_DETAILS,
        )
