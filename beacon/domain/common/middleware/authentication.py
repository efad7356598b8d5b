"""
Bearer credential guard.

Every route outside the public set must carry ``Authorization: Bearer <token>``.
The raw token is stored on ``request.state.access_token``; verifying it is the
job of the authentication layer that consumes it.
"""

from collections.abc import Iterable

from fastapi.requests import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from beacon.core.exceptions import error_response
from beacon.core.logging import get_logger

logger = get_logger(__name__)

NOT_AUTHENTICATED = 'Not authenticated'
INVALID_TOKEN = 'Invalid token'


def extract_bearer_token(header: str) -> str | None:
    """Return the token of a ``Bearer`` header, or None when malformed."""
    scheme, _, token = header.strip().partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        return None
    return token


class BearerAuthenticationMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        *,
        public_paths: Iterable[str],
        public_prefixes: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self._public_paths = frozenset(public_paths)
        self._public_prefixes = tuple(
            prefix.rstrip('/') + '/' for prefix in public_prefixes
        )

    def is_public(self, path: str) -> bool:
        # '/up/' must reach the router so it can redirect to '/up'
        exact = path.rstrip('/') or '/'
        return exact in self._public_paths or path.startswith(self._public_prefixes)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == 'OPTIONS' or self.is_public(request.url.path):
            return await call_next(request)

        header = request.headers.get('authorization')
        if not header:
            logger.bind(path=request.url.path).debug('missing credentials')
            return error_response(
                401, NOT_AUTHENTICATED, headers={'WWW-Authenticate': 'Bearer'}
            )

        token = extract_bearer_token(header)
        if token is None:
            logger.bind(path=request.url.path).debug('malformed credentials')
            return error_response(
                401, INVALID_TOKEN, headers={'WWW-Authenticate': 'Bearer'}
            )

        request.state.access_token = token
        return await call_next(request)
