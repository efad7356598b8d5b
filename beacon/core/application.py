from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from kink import inject
from starlette.middleware.trustedhost import TrustedHostMiddleware

from beacon.api import ERROR_PATHS, LIVENESS_PATH, api_router
from beacon.core.config import Configuration
from beacon.core.exceptions import install_exception_handlers
from beacon.core.logging import get_logger, setup_logging
from beacon.domain.common.middleware import (
    BearerAuthenticationMiddleware,
    RequestLoggingMiddleware,
)
from beacon.infrastructure.observability import configure_observability

logger = get_logger(__name__)

DOCS_URL = '/docs'
OPENAPI_URL = '/docs/openapi.json'
OAUTH2_REDIRECT_URL = '/docs/oauth2-redirect'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    logger.bind(version=app.version).info(f'{app.title} started')

    yield

    logger.info(f'{app.title} stopped')


def public_paths(config: Configuration) -> set[str]:
    """Routes reachable without credentials."""
    paths = {LIVENESS_PATH, *ERROR_PATHS, *config.api.public_paths}

    if config.observability.enabled:
        paths.add(config.observability.metrics_path)

    if config.app_environment != 'production':
        paths.update({DOCS_URL, OPENAPI_URL, OAUTH2_REDIRECT_URL})

    # the websocket handshake authenticates itself
    paths.add(config.cable.mount_path)

    return paths


@inject
def get_application(config: Configuration) -> FastAPI:
    """Create and configure the FastAPI application.

    Middleware is listed innermost first; Starlette wraps each new one
    around the previous.
    """
    docs_enabled = config.app_environment != 'production'

    app = FastAPI(
        description=config.app_description,
        docs_url=DOCS_URL if docs_enabled else None,
        openapi_url=OPENAPI_URL if docs_enabled else None,
        redoc_url=None,
        swagger_ui_oauth2_redirect_url=OAUTH2_REDIRECT_URL,
        title=config.app_name,
        version=config.app_version,
        lifespan=lifespan,
    )

    install_exception_handlers(app)

    if config.api.auth_enabled:
        app.add_middleware(
            BearerAuthenticationMiddleware,
            public_paths=public_paths(config),
            public_prefixes=[config.cable.mount_path],
        )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=['*'],
        allow_headers=['Authorization', 'Content-Type', 'X-Request-ID'],
        expose_headers=['X-Request-ID'],
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=config.api.allowed_hosts)

    configure_observability(app, config)

    app.include_router(api_router)

    return app
