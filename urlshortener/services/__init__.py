from urlshortener.services.api_key_service import ApiKeyService
from urlshortener.services.short_url_service import ShortURLService


__all__ = [
    'ApiKeyService',
    'ShortURLService',
]
