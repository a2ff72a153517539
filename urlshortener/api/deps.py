"""FastAPI dependencies: services and the API key gate."""

import logging

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from urlshortener.constants import API_KEY_HEADER
from urlshortener.models import ApiKeyModel
from urlshortener.services import ApiKeyService, ShortURLService
from urlshortener.api.helpers import guarantee_500_response


logger = logging.getLogger(__name__)

api_key_header_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


def get_api_key_service(request: Request) -> ApiKeyService:
    return request.app.state.api_key_service


def get_short_url_service(request: Request) -> ShortURLService:
    return request.app.state.short_url_service


@guarantee_500_response('Internal server error')
def require_api_key(
    api_key: str | None = Security(api_key_header_scheme),
    service: ApiKeyService = Depends(get_api_key_service),
) -> ApiKeyModel:
    """Validate the X-API-Key header and return the (now used) key."""
    return service.validate(api_key)
