"""Request and response schemas.

Fields are snake_case in Python and camelCase on the wire.
Timestamps are passed through as the ISO-8601 strings records store.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from urlshortener.models import ApiKeyModel, ShortURLModel
from urlshortener.utils.helpers import to_timestamp


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateApiKeyRequest(CamelModel):
    user_id: str | None = None
    description: str | None = None


class UpdateApiKeyRequest(CamelModel):
    description: str | None = None


class ApiKeyCreatedResponse(CamelModel):
    api_key: str
    user_id: str
    expires_at: str

    @classmethod
    def from_model(cls, api_key: ApiKeyModel) -> 'ApiKeyCreatedResponse':
        return cls(api_key=api_key.key, user_id=api_key.user_id, expires_at=to_timestamp(api_key.expires_at))


class ApiKeyInfo(CamelModel):
    api_key: str
    user_id: str
    created_at: str
    expires_at: str | None = None
    last_used: str | None = None
    revoked: bool = False
    revoked_at: str | None = None
    description: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_model(cls, api_key: ApiKeyModel) -> 'ApiKeyInfo':
        return cls.model_validate(api_key.to_response())


class MessageResponse(BaseModel):
    message: str


class ShortenRequest(CamelModel):
    url: str | None = None


class ShortenResponse(CamelModel):
    short_url: str
    original_url: str

    @classmethod
    def from_model(cls, short_url: ShortURLModel, short_url_string: str) -> 'ShortenResponse':
        return cls(short_url=short_url_string, original_url=short_url.target)


class HealthResponse(BaseModel):
    status: str
    backend: str
    stores: dict[str, bool]
