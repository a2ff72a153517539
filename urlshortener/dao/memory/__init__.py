from urlshortener.dao.memory.memory_record_store_dao import MemoryRecordStoreDAO


__all__ = [
    'MemoryRecordStoreDAO',
]
