"""Identifier generation and URL validation

Identifiers are random bytes from a cryptographically strong source encoded
as lowercase hexadecimal. No uniqueness check is made against stored records.

Functions:
    generate_token(nbytes) -> str
    generate_api_key() -> str      (32 hex chars)
    generate_user_id() -> str      (16 hex chars)
    generate_short_id() -> str     (8 hex chars)
    normalize_url(url) -> str
    is_valid_url(url) -> bool

Example:
    >>> len(generate_short_id())
    8
    >>> is_valid_url('https://example.com/x')
    True
    >>> is_valid_url('not-a-url')
    False
"""

import secrets
import urllib.parse
from typing import Any

from urlshortener.constants import TokenBytes


C0_CONTROL_OR_SPACE = ''.join(chr(c) for c in range(0x21))
REMOVE_TAB_AND_NEWLINE = str.maketrans('', '', '\t\n\r')
FORBIDDEN_HOST_CODE_POINTS = frozenset(C0_CONTROL_OR_SPACE + '#/:<>?@[\\]^|\x7f')


def generate_token(nbytes: int) -> str:
    if not isinstance(nbytes, int):
        raise TypeError(f'Byte count must be of type integer (given type: {type(nbytes)}).')
    if nbytes <= 0:
        raise ValueError(f'Byte count must be a positive integer (given value: {nbytes}).')
    return secrets.token_hex(nbytes)


def generate_api_key() -> str:
    return generate_token(TokenBytes.API_KEY)


def generate_user_id() -> str:
    return generate_token(TokenBytes.USER_ID)


def generate_short_id() -> str:
    return generate_token(TokenBytes.SHORT_ID)


def normalize_url(url: str) -> str:
    """Trim leading and trailing C0 controls and spaces and drop tabs and newlines, as browsers do."""
    return url.strip(C0_CONTROL_OR_SPACE).translate(REMOVE_TAB_AND_NEWLINE)


def is_valid_url(url: Any) -> bool:
    """Check that a value is an absolute URL

    An absolute URL has at least a scheme and a host, e.g. 'https://a.com'.
    The value is normalized first (see `normalize_url`). Relative references
    ('/path', 'example.com'), strings that urllib.parse rejects and hosts
    holding forbidden code points ('exa<mple.com', 'exa mple.com') are invalid.

    Args:
        url (Any): candidate value, usually taken from a JSON request body

    Returns:
        bool: True if `url` is a string holding an absolute URL
    """
    if not isinstance(url, str):
        return False
    url = normalize_url(url)
    if not url:
        return False

    try:
        components = urllib.parse.urlsplit(url)
        hostname = components.hostname
        _ = components.port  # raises ValueError on out-of-range or non-numeric ports
    except ValueError:
        return False

    if not components.scheme or not hostname:
        return False
    if components.netloc.rpartition('@')[2].startswith('['):
        return True  # IPv6 literal, checked by urlsplit
    return not any(c in FORBIDDEN_HOST_CODE_POINTS for c in hostname)
