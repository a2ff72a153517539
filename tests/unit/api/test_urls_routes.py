"""Unit tests for the shorten and redirect routes

Test coverage includes:

1. POST /api/shorten
   - Requires a valid, unrevoked, unexpired API key.
   - Authentication runs before body validation.
   - Rejects invalid URLs.
   - Records the key's lastUsed time.
   - Keys stored without an expiry time stay usable.

2. GET /{shortcode}
   - Redirects with 302 to the original URL.
   - Unknown ids respond with 404.
"""

import re

import pytest

from urlshortener.models import ApiKeyModel
from urlshortener.utils.helpers import from_timestamp


# -------------------------------
# 1. POST /api/shorten
# -------------------------------


def test_shorten(client, api_key):
    response = client.post('/api/shorten', headers={'X-API-Key': api_key}, json={'url': 'https://a.com'})

    assert response.status_code == 200
    body = response.json()
    assert body['originalUrl'] == 'https://a.com'
    assert re.fullmatch(r'http://testserver/[0-9a-f]{8}', body['shortUrl'])


def test_shorten_uses_request_host(client, api_key):
    response = client.post(
        '/api/shorten',
        headers={'X-API-Key': api_key, 'Host': 'sho.rt'},
        json={'url': 'https://example.com/x'},
    )

    assert response.json()['shortUrl'].startswith('http://sho.rt/')


def test_shorten_missing_api_key(client):
    response = client.post('/api/shorten', json={'url': 'https://a.com'})

    assert response.status_code == 401
    assert response.json() == {'error': 'API key is required'}


def test_shorten_unknown_api_key(client):
    response = client.post('/api/shorten', headers={'X-API-Key': 'f' * 32}, json={'url': 'https://a.com'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid API key'}


def test_shorten_revoked_api_key(client, api_key):
    client.delete(f'/api/keys/{api_key}')

    response = client.post('/api/shorten', headers={'X-API-Key': api_key}, json={'url': 'https://a.com'})

    assert response.status_code == 401
    assert response.json() == {'error': 'API key has been revoked'}


def test_shorten_expired_api_key(client, app):
    expired = ApiKeyModel(
        key='e' * 32,
        user_id='user123',
        created_at=from_timestamp('2020-01-01T00:00:00.000Z'),
        expires_at=from_timestamp('2020-01-31T00:00:00.000Z'),
    )
    app.state.api_key_service.store.put(expired.key, expired.to_record())

    response = client.post('/api/shorten', headers={'X-API-Key': expired.key}, json={'url': 'https://a.com'})

    assert response.status_code == 401
    assert response.json() == {'error': 'API key has expired'}


def test_shorten_checks_api_key_before_url(client):
    response = client.post('/api/shorten', json={'url': 'not-a-url'})

    assert response.status_code == 401
    assert response.json() == {'error': 'API key is required'}


@pytest.mark.parametrize('body', [{'url': 'not-a-url'}, {'url': ''}, {}, {'url': None}])
def test_shorten_invalid_url(client, api_key, body):
    response = client.post('/api/shorten', headers={'X-API-Key': api_key}, json=body)

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid URL provided'}


def test_shorten_non_string_url(client, api_key):
    response = client.post('/api/shorten', headers={'X-API-Key': api_key}, json={'url': 42})

    assert response.status_code == 400


def test_shorten_records_last_used(client, api_key):
    client.post('/api/shorten', headers={'X-API-Key': api_key}, json={'url': 'https://a.com'})

    (listed,) = client.get('/api/keys/user123').json()
    assert listed['lastUsed'] is not None


def test_shorten_with_key_stored_without_expiry(client, app):
    app.state.api_key_service.store.put('a' * 32, {'userId': 'legacy', 'createdAt': '2024-01-01T00:00:00.000Z'})

    response = client.post('/api/shorten', headers={'X-API-Key': 'a' * 32}, json={'url': 'https://a.com'})
    assert response.status_code == 200

    (listed,) = client.get('/api/keys/legacy').json()
    assert listed['expiresAt'] is None
    assert listed['lastUsed'] is not None


# -------------------------------
# 2. GET /{shortcode}
# -------------------------------


def test_redirect(client, api_key):
    short_url = client.post('/api/shorten', headers={'X-API-Key': api_key}, json={'url': 'https://example.com/x'}).json()['shortUrl']
    shortcode = short_url.rsplit('/', 1)[-1]

    response = client.get(f'/{shortcode}', follow_redirects=False)

    assert response.status_code == 302
    assert response.headers['location'] == 'https://example.com/x'


def test_redirect_does_not_require_api_key(client, app):
    app.state.short_url_service.store.put('1a2b3c4d', {'originalUrl': 'https://a.com', 'userId': 'u1', 'createdAt': '2025-10-15T12:00:00.000Z'})

    response = client.get('/1a2b3c4d', follow_redirects=False)

    assert response.status_code == 302
    assert response.headers['location'] == 'https://a.com'


def test_redirect_unknown_shortcode(client):
    response = client.get('/ffffffff', follow_redirects=False)

    assert response.status_code == 404
    assert response.json() == {'error': 'Short URL not found'}