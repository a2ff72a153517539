import pytest

from urlshortener.dao.memory import MemoryRecordStoreDAO
from urlshortener.services import ApiKeyService, ShortURLService


@pytest.fixture
def api_key_store():
    return MemoryRecordStoreDAO()


@pytest.fixture
def url_store():
    return MemoryRecordStoreDAO()


@pytest.fixture
def api_key_service(api_key_store):
    return ApiKeyService(api_key_store)


@pytest.fixture
def short_url_service(url_store):
    return ShortURLService(url_store)
