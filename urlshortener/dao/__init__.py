from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.dao.json import JsonRecordStoreDAO
from urlshortener.dao.memory import MemoryRecordStoreDAO


__all__ = [
    'RecordStoreBaseDAO',
    'JsonRecordStoreDAO',
    'MemoryRecordStoreDAO',
]
