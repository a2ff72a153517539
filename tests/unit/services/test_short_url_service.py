"""Unit tests for the ShortURLService

Test coverage includes:
    1. Shortening valid and invalid URLs, storing the normalized URL
    2. Resolving short ids
    3. Short id collisions overwrite the earlier mapping
"""

import logging
import re
from datetime import datetime, UTC

import pytest
from freezegun import freeze_time

from urlshortener.exceptions import InvalidURLError, ShortURLNotFoundError


# -------------------------------
# 1. Shortening
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_shorten(short_url_service, url_store):
    short_url = short_url_service.shorten('https://example.com/x', user_id='user123')

    assert re.fullmatch(r'[0-9a-f]{8}', short_url.shortcode)
    assert short_url.target == 'https://example.com/x'
    assert short_url.created_at == datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
    assert url_store.get(short_url.shortcode) == {
        'originalUrl': 'https://example.com/x',
        'userId': 'user123',
        'createdAt': '2025-10-15T12:00:00.000Z',
    }


def test_shorten_same_url_twice_gives_distinct_ids(short_url_service, url_store):
    first = short_url_service.shorten('https://a.com', user_id='user123')
    second = short_url_service.shorten('https://a.com', user_id='user123')

    assert first.shortcode != second.shortcode
    assert len(url_store.read()) == 2


def test_shorten_stores_normalized_url(short_url_service, url_store):
    short_url = short_url_service.shorten('  https://example.com/x\n', user_id='user123')

    assert short_url.target == 'https://example.com/x'
    assert url_store.get(short_url.shortcode)['originalUrl'] == 'https://example.com/x'


@pytest.mark.parametrize('url', ['not-a-url', '', '   ', 'http://exa<mple.com', None, 'example.com', '/relative/path', 42])
def test_shorten_invalid_url(short_url_service, url_store, url):
    with pytest.raises(InvalidURLError, match='Invalid URL provided') as exc_info:
        short_url_service.shorten(url, user_id='user123')

    assert exc_info.value.status_code == 400
    assert url_store.read() == {}


# -------------------------------
# 2. Resolving
# -------------------------------


def test_resolve(short_url_service):
    short_url = short_url_service.shorten('https://example.com/x', user_id='user123')
    assert short_url_service.resolve(short_url.shortcode).target == 'https://example.com/x'


def test_resolve_unknown_id(short_url_service):
    with pytest.raises(ShortURLNotFoundError, match='Short URL not found') as exc_info:
        short_url_service.resolve('ffffffff')
    assert exc_info.value.status_code == 404


# -------------------------------
# 3. Collisions
# -------------------------------


def test_collision_overwrites_and_warns(short_url_service, url_store, monkeypatch, caplog):
    monkeypatch.setattr('urlshortener.services.short_url_service.generate_short_id', lambda: 'deadbeef')

    short_url_service.shorten('https://first.example.com', user_id='user123')
    with caplog.at_level(logging.WARNING, logger='urlshortener.services.short_url_service'):
        short_url_service.shorten('https://second.example.com', user_id='user456')

    assert url_store.read() == {'deadbeef': {'originalUrl': 'https://second.example.com', 'userId': 'user456', 'createdAt': url_store.get('deadbeef')['createdAt']}}
    assert 'collision' in caplog.text
