"""API key registry

Creates, lists, revokes and describes API keys, and validates them for the
shorten route. All state lives in an injected record store keyed by the API
key string.

Example:
    >>> from urlshortener.dao.memory import MemoryRecordStoreDAO
    >>> service = ApiKeyService(MemoryRecordStoreDAO())
    >>> api_key = service.create(description='CI pipeline')
    >>> service.validate(api_key.key).user_id == api_key.user_id
    True
"""

import logging
import dataclasses
from datetime import timedelta

from urlshortener.models import ApiKeyModel
from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.constants import ApiKeyPolicy
from urlshortener.exceptions import (
    ApiKeyNotFoundError,
    ApiKeyQuotaExceededError,
    ExpiredApiKeyError,
    InvalidApiKeyError,
    MissingApiKeyError,
    RevokedApiKeyError,
)
from urlshortener.utils.helpers import utcnow, mask_api_key
from urlshortener.utils.shortener import generate_api_key, generate_user_id


logger = logging.getLogger(__name__)


class ApiKeyService:
    """Application service for API key management."""

    def __init__(
        self,
        store: RecordStoreBaseDAO,
        max_keys_per_user: int = ApiKeyPolicy.MAX_KEYS_PER_USER,
        expiration_days: int = ApiKeyPolicy.EXPIRATION_DAYS,
    ):
        self.store = store
        self.max_keys_per_user = max_keys_per_user
        self.expiration = timedelta(days=expiration_days)

    def count_user_keys(self, user_id: str) -> int:
        # NOTE: revoked keys are counted too, so revoking a key doesn't free a slot
        return len(self.store.list(lambda _, record: record.get('userId') == user_id))

    def create(self, user_id: str | None = None, description: str | None = None) -> ApiKeyModel:
        """Issue a new API key

        Args:
            user_id (str | None):
                Owner of the key. A random user id is generated when omitted or empty.
            description (str | None):
                Optional label. Empty strings are stored as null.

        Returns:
            ApiKeyModel: the stored key

        Raises:
            ApiKeyQuotaExceededError: if the user already holds the maximum number of keys
            DataStoreError: on store failures
        """
        user_id = user_id or generate_user_id()

        with self.store.transaction():
            if self.count_user_keys(user_id) >= self.max_keys_per_user:
                logger.info('API key quota reached.', extra={'userId': user_id, 'limit': self.max_keys_per_user})
                raise ApiKeyQuotaExceededError(self.max_keys_per_user)

            now = utcnow()
            api_key = ApiKeyModel(
                key=generate_api_key(),
                user_id=user_id,
                created_at=now,
                expires_at=now + self.expiration,
                description=description or None,
            )
            self.store.put(api_key.key, api_key.to_record())

        logger.info('API key created.', extra={'userId': user_id, 'apiKey': mask_api_key(api_key.key)})
        return api_key

    def list_user_keys(self, user_id: str) -> list[ApiKeyModel]:
        records = self.store.list(lambda _, record: record.get('userId') == user_id)
        return [ApiKeyModel.from_record(key, record) for key, record in records.items()]

    def get(self, api_key: str) -> ApiKeyModel:
        record = self.store.get(api_key)
        if record is None:
            raise ApiKeyNotFoundError()
        return ApiKeyModel.from_record(api_key, record)

    def revoke(self, api_key: str) -> ApiKeyModel:
        """Soft-delete a key. Revoking an already revoked key refreshes revokedAt."""
        with self.store.transaction():
            revoked = dataclasses.replace(self.get(api_key), revoked=True, revoked_at=utcnow())
            self.store.put(api_key, revoked.to_record())

        logger.info('API key revoked.', extra={'userId': revoked.user_id, 'apiKey': mask_api_key(api_key)})
        return revoked

    def update_description(self, api_key: str, description: str | None) -> ApiKeyModel:
        with self.store.transaction():
            updated = dataclasses.replace(self.get(api_key), description=description, updated_at=utcnow())
            self.store.put(api_key, updated.to_record())

        logger.info('API key description updated.', extra={'userId': updated.user_id, 'apiKey': mask_api_key(api_key)})
        return updated

    def validate(self, api_key: str | None) -> ApiKeyModel:
        """Authorize a request by its API key and record the usage

        Checks run in this order: presence, existence, revocation, expiry.

        Returns:
            ApiKeyModel: the key with `last_used` set to now

        Raises:
            MissingApiKeyError: if no key was provided
            InvalidApiKeyError: if the key doesn't exist
            RevokedApiKeyError: if the key was revoked
            ExpiredApiKeyError: if the key's expiry time has passed
            DataStoreError: on store failures
        """
        if not api_key:
            logger.info('API key authorization failed.', extra={'reason': 'missing'})
            raise MissingApiKeyError()

        with self.store.transaction():
            record = self.store.get(api_key)
            if record is None:
                logger.info('API key authorization failed.', extra={'reason': 'invalid', 'apiKey': mask_api_key(api_key)})
                raise InvalidApiKeyError()

            key = ApiKeyModel.from_record(api_key, record)
            now = utcnow()
            if key.revoked:
                logger.info('API key authorization failed.', extra={'reason': 'revoked', 'apiKey': mask_api_key(api_key)})
                raise RevokedApiKeyError()
            if key.is_expired(now):
                logger.info('API key authorization failed.', extra={'reason': 'expired', 'apiKey': mask_api_key(api_key)})
                raise ExpiredApiKeyError()

            used = dataclasses.replace(key, last_used=now)
            self.store.put(api_key, used.to_record())

        logger.debug('API key authorized.', extra={'userId': used.user_id, 'apiKey': mask_api_key(api_key)})
        return used
