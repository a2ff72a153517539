from urlshortener.dao.redis.redis_key_schema import RedisKeySchema
from urlshortener.dao.redis.redis_record_store_dao import RedisRecordStoreDAO


__all__ = [
    'RedisKeySchema',
    'RedisRecordStoreDAO',
]
