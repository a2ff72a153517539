from urlshortener.api.routes import api_keys, system, urls


__all__ = [
    'api_keys',
    'system',
    'urls',
]
