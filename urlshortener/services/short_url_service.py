"""URL registry

Binds random short identifiers to original URLs and resolves them for
redirection. Identifiers are 32 bits of randomness; a collision silently
replaces the earlier mapping.
"""

import logging

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.exceptions import InvalidURLError, ShortURLNotFoundError
from urlshortener.utils.helpers import utcnow
from urlshortener.utils.shortener import generate_short_id, is_valid_url, normalize_url


logger = logging.getLogger(__name__)


class ShortURLService:
    """Application service for short URL management."""

    def __init__(self, store: RecordStoreBaseDAO):
        self.store = store

    def shorten(self, url: str | None, user_id: str) -> ShortURLModel:
        """Store a new short URL mapping

        The same URL shortened twice yields two independent mappings. The URL
        is stored normalized: surrounding whitespace, tabs and newlines removed.

        Args:
            url (str | None): original URL, must be absolute (scheme and host)
            user_id (str): owner, taken from the authenticated API key

        Returns:
            ShortURLModel: the stored mapping

        Raises:
            InvalidURLError: if `url` is missing or not an absolute URL
            DataStoreError: on store failures
        """
        if not is_valid_url(url):
            logger.info('Rejected invalid URL.', extra={'userId': user_id})
            raise InvalidURLError()

        short_url = ShortURLModel(
            shortcode=generate_short_id(),
            target=normalize_url(url),
            user_id=user_id,
            created_at=utcnow(),
        )

        with self.store.transaction():
            if self.store.get(short_url.shortcode) is not None:
                logger.warning('Short id collision, overwriting existing mapping.', extra={'shortcode': short_url.shortcode})
            self.store.put(short_url.shortcode, short_url.to_record())

        logger.info('URL shortened.', extra={'shortcode': short_url.shortcode, 'userId': user_id})
        return short_url

    def resolve(self, shortcode: str) -> ShortURLModel:
        """Look up the mapping for a short identifier

        Raises:
            ShortURLNotFoundError: if no mapping exists
            DataStoreError: on store failures
        """
        record = self.store.get(shortcode)
        if record is None:
            logger.info('Short URL not found.', extra={'shortcode': shortcode})
            raise ShortURLNotFoundError()
        return ShortURLModel.from_record(shortcode, record)
