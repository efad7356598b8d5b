import time

from fastapi.requests import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from beacon.core.logging import get_logger
from beacon.domain.common.utils import (
    ClientIPExtractor,
    ContextExtractor,
    DataSanitizer,
)

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, correlated by request id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = ContextExtractor.get_request_id(request)
        start = time.perf_counter()

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers['X-Request-ID'] = request_id

        log = logger.bind(
            event='request',
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
            client_ip=ClientIPExtractor.extract_client_ip(request),
        )
        log.info(f'{request.method} {request.url.path} {response.status_code}')
        log.bind(headers=DataSanitizer.sanitize_headers(request.headers)).debug(
            'request headers'
        )

        return response
