"""FastAPI application factory.

Run with the bundled entry point (`python -m urlshortener`) or directly with
uvicorn:

    uvicorn urlshortener.api.app:create_app --factory --port 3000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from urlshortener.types import AppConfig
from urlshortener.constants import StoreBackend, StoreName
from urlshortener.exceptions import URLShortenerError
from urlshortener.dao.factory import create_record_store, ensure_data_dir
from urlshortener.services import ApiKeyService, ShortURLService
from urlshortener.utils.config import load_config
from urlshortener.api.routes import api_keys, system, urls


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.config['store']
    logger.info('Application startup.', extra={'backend': store['backend'], 'dataDir': store['data_dir']})
    yield
    logger.info('Application shutdown.')


async def handle_app_error(request: Request, exc: URLShortenerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error('Request failed. Responding with %s.', exc.status_code, extra={'errorCode': exc.error_code, 'path': request.url.path})
    else:
        logger.info('Request rejected. Responding with %s.', exc.status_code, extra={'errorCode': exc.error_code, 'path': request.url.path})
    return JSONResponse(status_code=exc.status_code, content={'error': exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Malformed request body. Responding with 400.', extra={'path': request.url.path})
    return JSONResponse(status_code=400, content={'error': 'Invalid request body'})


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail}, headers=getattr(exc, 'headers', None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled exception. Responding with 500.', extra={'path': request.url.path})
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


def create_app(
    config: AppConfig | None = None,
    api_key_service: ApiKeyService | None = None,
    short_url_service: ShortURLService | None = None,
) -> FastAPI:
    """Build the application and its services

    Args:
        config (AppConfig | None):
            Resolved configuration. Loaded from the environment when omitted.
        api_key_service (ApiKeyService | None):
            Pre-built service; created from the configured store when omitted.
        short_url_service (ShortURLService | None):
            Pre-built service; created from the configured store when omitted.

    Returns:
        FastAPI: the ASGI application

    Raises:
        BadConfigurationError: on invalid configuration
        DataStoreError: if the data directory can't be created or Redis is unreachable
    """
    config = config or load_config()
    store_config = config['store']

    if store_config['backend'] == StoreBackend.JSON:
        ensure_data_dir(store_config['data_dir'])

    if api_key_service is None:
        api_key_service = ApiKeyService(create_record_store(StoreName.API_KEYS, store_config))
    if short_url_service is None:
        short_url_service = ShortURLService(create_record_store(StoreName.URLS, store_config))

    app = FastAPI(
        title='URL Shortener',
        description='Issues API keys, shortens URLs and redirects short links.',
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.api_key_service = api_key_service
    app.state.short_url_service = short_url_service

    app.add_exception_handler(URLShortenerError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(system.router)
    app.include_router(api_keys.router)
    app.include_router(urls.router)  # catch-all redirect route goes last
    return app
