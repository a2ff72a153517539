"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., unreadable file,
        connection issues, timeouts, etc.).

    RecordParseError:
        Raised when a stored document exists but can't be parsed as a JSON object.

Example:
    >>> from urlshortener.dao.exceptions import RecordParseError
    >>> raise RecordParseError("data/urls.json is not valid JSON.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.RecordParseError: data/urls.json is not valid JSON.
"""

from urlshortener.exceptions import URLShortenerError


class DAOError(URLShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'store:dao_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. unreadable or unwritable files, connection issues, timeouts, etc.
    """

    error_code = 'store:data_store_error'


class RecordParseError(DataStoreError):
    """Exception raised when a stored document is not a valid JSON object."""

    error_code = 'store:record_parse_error'
