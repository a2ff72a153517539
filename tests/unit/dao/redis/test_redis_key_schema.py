"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Record store key generation
   - Ensures records_key() generates the hash key for a store name.
   - Ensures empty store names raise ValueError.

2. Prefix behavior
   - Confirms keys are not prefixed when no prefix is provided.
   - Confirms keys are correctly prefixed when a valid prefix is provided.
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from urlshortener.constants import StoreName
from urlshortener.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Record store key generation
# -------------------------------


@pytest.mark.parametrize(
    'store_name, expected',
    [
        ('urls', 'records:urls'),
        ('api-keys', 'records:api-keys'),
        (StoreName.API_KEYS, 'records:api-keys'),
    ],
)
def test_records_key(store_name, expected):
    """Ensure records_key() generates valid Redis keys."""
    keys = RedisKeySchema()
    assert keys.records_key(store_name) == expected


@pytest.mark.parametrize('store_name', ['', None])
def test_records_key_requires_store_name(store_name):
    with pytest.raises(ValueError):
        RedisKeySchema().records_key(store_name)


# -------------------------------
# 2. Prefix behavior
# -------------------------------


@pytest.mark.parametrize(
    'prefix, expected',
    [
        ('urlshortener:prod', 'urlshortener:prod:records:urls'),
        ('secret', 'secret:records:urls'),
        (None, 'records:urls'),
    ],
)
def test_key_prefixing(prefix, expected):
    """Ensure keys are correctly prefixed when a prefix is provided."""
    keys = RedisKeySchema(prefix=prefix)
    assert keys.records_key('urls') == expected


@pytest.mark.parametrize('prefix', [123, -1, 45.6, [], {}])
def test_invalid_prefix_type_raises_error(prefix):
    """Ensure invalid prefix types raise a TypeError."""
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
