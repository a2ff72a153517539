"""Helper utilities shared by services and HTTP routes.

Functions:
    utcnow() -> datetime
        Return the current time as a timezone-aware UTC datetime
    to_timestamp(dt: datetime | None) -> str | None
        Serialize a datetime the way records store it (ISO-8601, ms, 'Z')
    from_timestamp(value: str | None) -> datetime | None
        Parse a stored timestamp back into an aware UTC datetime
    base_url(request) -> str
        Extract the public base URL (scheme + host) of an incoming request
    get_short_url(short_id, request) -> str
        Get string representation of the short URL for a given short id
    mask_api_key(api_key) -> str
        Shorten an API key for logging

Example:
    >>> from datetime import datetime, UTC
    >>> to_timestamp(datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
    '2025-10-15T12:00:00.000Z'
    >>> from_timestamp('2025-10-15T12:00:00.000Z')
    datetime.datetime(2025, 10, 15, 12, 0, tzinfo=datetime.timezone.utc)
"""

from datetime import datetime, UTC

from starlette.requests import Request


def utcnow() -> datetime:
    return datetime.now(UTC)


def to_timestamp(dt: datetime | None) -> str | None:
    """Serialize a datetime as an ISO-8601 UTC string with millisecond precision

    Args:
        dt (datetime | None): naive datetimes are assumed to be UTC

    Returns:
        str | None: e.g. '2025-10-15T12:00:00.000Z', or None for None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    # fmt: off
    return dt.astimezone(UTC) \
             .isoformat(timespec='milliseconds') \
             .replace('+00:00', 'Z')
    # fmt: on


def from_timestamp(value: str | None) -> datetime | None:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime

    Raises:
        ValueError: if the value is not an ISO-8601 timestamp
    """
    if value is None:
        return None
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def base_url(request: Request) -> str:
    """Extract public base URL from an incoming request

    Uses the request's scheme and the Host header the client sent, falling
    back to the server address when the header is missing.

    Args:
        request (Request): incoming Starlette/FastAPI request

    Returns:
        str: Base URL, e.g. 'http://localhost:3000'
    """
    host = request.headers.get('host') or request.url.netloc
    return f'{request.url.scheme}://{host}'


def get_short_url(short_id: str, request: Request) -> str:
    """Get string representation of shortened URL

    Args:
        short_id (str): short identifier
        request (Request): request which created the short URL

    Returns:
        str: short url string representation
    """
    return f'{base_url(request).rstrip("/")}/{short_id}'


def mask_api_key(api_key: str | None) -> str:
    """Return the first 8 characters of an API key followed by an ellipsis."""
    if not api_key:
        return ''
    return f'{api_key[:8]}...'
