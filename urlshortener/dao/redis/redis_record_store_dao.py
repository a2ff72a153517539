"""Data Access Object (DAO) implementation for record stores in Redis

Each record store maps onto one Redis hash: the hash field is the record
identifier and the value is the JSON-encoded record. Single-record access
uses HGET/HSET directly instead of rewriting the whole mapping.

Classes:
    RedisRecordStoreDAO:
        DAO for storing and retrieving records in a Redis hash.

Example:
    >>> from urlshortener.dao.redis import RedisRecordStoreDAO

    >>> store = RedisRecordStoreDAO('urls', prefix='urlshortener:dev')
    >>> store.put('1a2b3c4d', {'originalUrl': 'https://example.com', ...})
    <RedisRecordStoreDAO name='urls'>

    >>> store.get('1a2b3c4d')['originalUrl']
    'https://example.com'

    >>> store.ping()
    True
"""

import json
import logging
import functools
from collections.abc import Callable

import redis
from beartype import beartype

from urlshortener.types import Record, RecordMapping
from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.exceptions import DataStoreError, RecordParseError


logger = logging.getLogger(__name__)

REDIS_CONNECTION_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def handle_redis_connection_error(method: Callable) -> Callable:
    """Turn Redis connectivity failures inside a DAO method into DataStoreError."""

    @functools.wraps(method)
    def wrapper(self: 'RedisRecordStoreDAO', *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTION_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {self.address}.") from e

    return wrapper


class RedisRecordStoreDAO(RecordStoreBaseDAO):
    """Redis-hash-based record store

    Attributes:
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        name (str):
            Record store name, e.g. 'api-keys' or 'urls'.
        records_key (str):
            Namespaced key of the store's hash, e.g. 'urlshortener:dev:records:urls'.

    Methods:
        read() -> RecordMapping:
            HGETALL the store's hash and decode every record.
            Raises RecordParseError when a stored value isn't a JSON object.
            Raises DataStoreError on connectivity issues with Redis.

        write(records: RecordMapping) -> RedisRecordStoreDAO:
            Replace the hash contents in a single transaction (DEL + HSET).
            Raises DataStoreError on connectivity issues with Redis.

        get(record_id: str) -> Record | None:
            HGET a single record.

        put(record_id: str, record: Record) -> RedisRecordStoreDAO:
            HSET a single record.

        ping() -> bool:
            PING Redis. False when the server can't be reached.
    """

    def __init__(
        self,
        name: str,
        redis_host: str = 'localhost',
        redis_port: int = 6379,
        redis_db: int = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Connect a record store to Redis

        Either pass a ready `redis_client` or the connection parameters to
        build one. `prefix` namespaces the hash key, e.g. 'urlshortener:prod'.

        Raises:
            DataStoreError:
                If Redis doesn't answer the initial PING.
        """
        super().__init__()

        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=True,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.name = name
        self.records_key = RedisKeySchema(prefix=prefix).records_key(name)

        if not self.ping():
            raise DataStoreError(f"Can't connect to Redis at {self.address}. Check the provided configuration parameters.")

    @property
    def address(self) -> str:
        info = self.redis.connection_pool.connection_kwargs
        return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except REDIS_CONNECTION_ERRORS:
            logger.warning('Redis is unreachable.', extra={'address': self.address, 'store': self.name})
            return False

    @handle_redis_connection_error
    def read(self) -> RecordMapping:
        raw_records = self.redis.hgetall(self.records_key)
        return {record_id: self._decode(record_id, value) for record_id, value in raw_records.items()}

    @handle_redis_connection_error
    @beartype
    def write(self, records: RecordMapping) -> 'RedisRecordStoreDAO':
        # NOTE: DEL and HSET run as one MULTI/EXEC transaction so readers never
        #       observe the hash emptied but not yet repopulated.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self.records_key)
            if records:
                pipe.hset(self.records_key, mapping={record_id: self._encode(record) for record_id, record in records.items()})
            pipe.execute()
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, record_id: str) -> Record | None:
        value = self.redis.hget(self.records_key, record_id)
        if value is None:
            return None
        return self._decode(record_id, value)

    @handle_redis_connection_error
    @beartype
    def put(self, record_id: str, record: Record) -> 'RedisRecordStoreDAO':
        self.redis.hset(self.records_key, record_id, self._encode(record))
        return self

    @staticmethod
    def _encode(record: Record) -> str:
        return json.dumps(record, ensure_ascii=False)

    def _decode(self, record_id: str, value: str | bytes) -> Record:
        try:
            record = json.loads(value)
        except json.JSONDecodeError as e:
            raise RecordParseError(f"Record '{record_id}' in {self.records_key} is not valid JSON.") from e

        if not isinstance(record, dict):
            raise RecordParseError(f"Record '{record_id}' in {self.records_key} must be a JSON object.")
        return record

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name='{self.name}'>"
