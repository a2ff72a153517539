"""Records persisted by the record stores.

Both models are immutable; services derive updated copies with
`dataclasses.replace()` and write them back whole.

Stored form is a camelCase JSON object keyed by the model's identifier, which
is not repeated inside the record:

    "3f1c...e9": {
        "userId": "a1b2c3d4e5f60718",
        "createdAt": "2025-10-15T12:00:00.000Z",
        "expiresAt": "2025-11-14T12:00:00.000Z",
        "lastUsed": null,
        "revoked": false,
        "revokedAt": null,
        "description": "CI pipeline",
        "updatedAt": null
    }
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from urlshortener.types import Record
from urlshortener.utils.helpers import to_timestamp, from_timestamp


# fmt: off
@dataclass(frozen=True)
class ApiKeyModel:
    key: str                              # Opaque hex bearer credential, primary identifier
    user_id: str                          # Owner of the key
    created_at: datetime                  # Creation time
    expires_at: datetime | None           # created_at + expiration window, None never expires
    last_used: datetime | None = None     # Last successful validation
    revoked: bool = False                 # Soft-delete flag
    revoked_at: datetime | None = None    # Time of (latest) revocation
    description: str | None = None        # Free-form label
    updated_at: datetime | None = None    # Last description update
    # fmt: on

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def to_record(self) -> Record:
        return {
            'userId': self.user_id,
            'createdAt': to_timestamp(self.created_at),
            'expiresAt': to_timestamp(self.expires_at),
            'lastUsed': to_timestamp(self.last_used),
            'revoked': self.revoked,
            'revokedAt': to_timestamp(self.revoked_at),
            'description': self.description,
            'updatedAt': to_timestamp(self.updated_at),
        }

    def to_response(self) -> dict[str, Any]:
        """Record annotated with its key, as returned by the key management routes."""
        return {'apiKey': self.key, **self.to_record()}

    @classmethod
    def from_record(cls, key: str, record: Record) -> 'ApiKeyModel':
        """Build a model from a stored record

        Records without `expiresAt` (written before keys expired) load as
        keys that never expire.

        Raises:
            KeyError: if a required field is missing
            ValueError: if a timestamp is malformed
        """
        return cls(
            key=key,
            user_id=record['userId'],
            created_at=from_timestamp(record['createdAt']),
            expires_at=from_timestamp(record.get('expiresAt')),
            last_used=from_timestamp(record.get('lastUsed')),
            revoked=bool(record.get('revoked', False)),
            revoked_at=from_timestamp(record.get('revokedAt')),
            description=record.get('description'),
            updated_at=from_timestamp(record.get('updatedAt')),
        )


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    shortcode: str                        # Random hex short identifier, primary identifier
    target: str                           # Original long URL
    user_id: str                          # Owner (from the authenticated API key)
    created_at: datetime                  # Creation time
    # fmt: on

    def to_record(self) -> Record:
        return {
            'originalUrl': self.target,
            'userId': self.user_id,
            'createdAt': to_timestamp(self.created_at),
        }

    @classmethod
    def from_record(cls, shortcode: str, record: Record) -> 'ShortURLModel':
        return cls(
            shortcode=shortcode,
            target=record['originalUrl'],
            user_id=record['userId'],
            created_at=from_timestamp(record['createdAt']),
        )
