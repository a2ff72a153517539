"""Helpers for FastAPI route functions."""

import logging
import functools
from collections.abc import Callable

from urlshortener.dao.exceptions import DAOError
from urlshortener.exceptions import URLShortenerError, InternalServerError


logger = logging.getLogger(__name__)


def guarantee_500_response(message: str) -> Callable:
    """Decorator: turn unexpected failures inside a route into a 500 with `message`

    Application errors (not found, auth, validation, quota) pass through
    unchanged and are rendered by the app's exception handlers. Store failures
    and any other exception become InternalServerError(message).

    Args:
        message (str): client-facing error message, e.g. 'Error shortening URL'

    Example:
        >>> @router.post('/api/shorten')
        ... @guarantee_500_response('Error shortening URL')
        ... def shorten_url(...):
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except DAOError as e:
                logger.exception('Data store failure. Responding with 500.', extra={'errorCode': e.error_code})
                raise InternalServerError(message) from e
            except URLShortenerError:
                raise
            except Exception as e:
                logger.exception('Unexpected failure. Responding with 500.')
                raise InternalServerError(message) from e

        return wrapper

    return decorator
