"""Shorten and redirect endpoints.

`POST /api/shorten` is the only route behind the API key gate. The redirect
route matches any single path segment, so this router is included last.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from urlshortener.models import ApiKeyModel
from urlshortener.services import ShortURLService
from urlshortener.api.deps import get_short_url_service, require_api_key
from urlshortener.api.helpers import guarantee_500_response
from urlshortener.api.schemas import ShortenRequest, ShortenResponse
from urlshortener.utils.helpers import get_short_url


logger = logging.getLogger(__name__)
router = APIRouter(tags=['urls'])


@router.post('/api/shorten', response_model=ShortenResponse)
@guarantee_500_response('Error shortening URL')
def shorten_url(
    request: Request,
    body: ShortenRequest | None = None,
    api_key: ApiKeyModel = Depends(require_api_key),
    service: ShortURLService = Depends(get_short_url_service),
):
    url = body.url if body is not None else None
    short_url = service.shorten(url, user_id=api_key.user_id)
    return ShortenResponse.from_model(short_url, get_short_url(short_url.shortcode, request))


@router.get('/{shortcode}', response_class=RedirectResponse, status_code=302)
@guarantee_500_response('Error redirecting to URL')
def redirect_url(
    shortcode: str,
    service: ShortURLService = Depends(get_short_url_service),
):
    short_url = service.resolve(shortcode)
    logger.info('Redirecting client to target URL.', extra={'shortcode': shortcode})
    return RedirectResponse(short_url.target, status_code=302)
