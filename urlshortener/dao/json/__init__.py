from urlshortener.dao.json.json_record_store_dao import JsonRecordStoreDAO


__all__ = [
    'JsonRecordStoreDAO',
]
