from .authentication import BearerAuthenticationMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = ['BearerAuthenticationMiddleware', 'RequestLoggingMiddleware']
