import pytest
from fastapi.testclient import TestClient

from urlshortener.api import create_app


@pytest.fixture
def config(tmp_path):
    return {
        'server': {'host': '127.0.0.1', 'port': 3000},
        'store': {
            'backend': 'memory',
            'data_dir': str(tmp_path / 'data'),
            'redis': {'host': 'localhost', 'port': 6379, 'db': 0, 'username': None, 'password': None},
        },
    }


@pytest.fixture
def app(config):
    return create_app(config)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def api_key(client):
    """Issue a fresh API key for user 'user123'."""
    response = client.post('/api/keys', json={'userId': 'user123'})
    return response.json()['apiKey']
