from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from beacon.core.exceptions import (
    INTERNAL_ERROR_DETAILS,
    INTERNAL_ERROR_MESSAGE,
    NOT_FOUND_MESSAGE,
    UNPROCESSABLE_DETAILS,
    UNPROCESSABLE_MESSAGE,
    ErrorEnvelope,
    error_response,
    route_not_found_details,
)

ERROR_PATHS = ('/404', '/422', '/500')

router = APIRouter(tags=['errors'], include_in_schema=False)


@router.get('/404', response_model=ErrorEnvelope)
async def not_found(request: Request) -> JSONResponse:
    return error_response(
        404, NOT_FOUND_MESSAGE, route_not_found_details(request.url.path)
    )


@router.get('/422', response_model=ErrorEnvelope)
async def unprocessable_entity() -> JSONResponse:
    return error_response(422, UNPROCESSABLE_MESSAGE, UNPROCESSABLE_DETAILS)


@router.get('/500', response_model=ErrorEnvelope)
async def internal_server_error() -> JSONResponse:
    return error_response(500, INTERNAL_ERROR_MESSAGE, INTERNAL_ERROR_DETAILS)
