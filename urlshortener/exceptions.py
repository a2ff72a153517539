"""Application-specific exceptions.

Every exception carries an `error_code` for logs and a `status_code` used by
the HTTP layer when converting it into a `{"error": message}` response.

Example:
    >>> from urlshortener.exceptions import ApiKeyNotFoundError
    >>> raise ApiKeyNotFoundError()
    Traceback (most recent call last):
        ...
    urlshortener.exceptions.ApiKeyNotFoundError: API key not found
"""


class URLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:urlshortener_error'
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(URLShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ValidationError(URLShortenerError):
    """Raised when a request carries missing or malformed input."""

    error_code = 'request:validation_error'
    status_code = 400
    default_message = 'Invalid request'


class InvalidURLError(ValidationError):
    error_code = 'request:invalid_url'
    default_message = 'Invalid URL provided'


class MissingApiKeyError(ValidationError):
    error_code = 'auth:missing_api_key'
    status_code = 401
    default_message = 'API key is required'


class AuthError(URLShortenerError):
    """Raised when an API key can't be used to authenticate."""

    error_code = 'auth:auth_error'
    status_code = 401
    default_message = 'Unauthorized'


class InvalidApiKeyError(AuthError):
    error_code = 'auth:invalid_api_key'
    default_message = 'Invalid API key'


class RevokedApiKeyError(AuthError):
    error_code = 'auth:revoked_api_key'
    default_message = 'API key has been revoked'


class ExpiredApiKeyError(AuthError):
    error_code = 'auth:expired_api_key'
    default_message = 'API key has expired'


class NotFoundError(URLShortenerError):
    """Raised when a requested record doesn't exist."""

    error_code = 'app:not_found'
    status_code = 404
    default_message = 'Not found'


class ApiKeyNotFoundError(NotFoundError):
    error_code = 'app:api_key_not_found'
    default_message = 'API key not found'


class ShortURLNotFoundError(NotFoundError):
    error_code = 'app:short_url_not_found'
    default_message = 'Short URL not found'


class QuotaError(URLShortenerError):
    """Raised when a per-user limit would be exceeded."""

    error_code = 'app:quota_error'
    status_code = 400
    default_message = 'Quota exceeded'


class ApiKeyQuotaExceededError(QuotaError):
    error_code = 'app:api_key_quota_exceeded'

    def __init__(self, limit: int, message: str | None = None):
        self.limit = limit
        super().__init__(message or f'Maximum number of API keys ({limit}) reached for this user')


class InternalServerError(URLShortenerError):
    """Raised at the HTTP boundary when an operation fails unexpectedly (e.g. a store failure)."""

    error_code = 'app:internal_server_error'
