"""In-memory record store

Keeps the mapping in a plain dict. Nothing survives a restart; intended for
tests and throwaway local runs (`STORE_BACKEND=memory`).

Example:
    >>> from urlshortener.dao.memory import MemoryRecordStoreDAO
    >>> store = MemoryRecordStoreDAO({'1a2b3c4d': {'originalUrl': 'https://a.com'}})
    >>> store.get('1a2b3c4d')
    {'originalUrl': 'https://a.com'}
"""

import copy

from beartype import beartype

from urlshortener.types import RecordMapping
from urlshortener.dao.base import RecordStoreBaseDAO


class MemoryRecordStoreDAO(RecordStoreBaseDAO):
    """Dict-based record store

    Reads and writes deep-copy the mapping, so callers can't mutate stored
    records without going through `write()` or `put()`.
    """

    def __init__(self, records: RecordMapping | None = None):
        super().__init__()
        self._records: RecordMapping = copy.deepcopy(records) if records else {}

    def read(self) -> RecordMapping:
        with self._lock:
            return copy.deepcopy(self._records)

    @beartype
    def write(self, records: RecordMapping) -> 'MemoryRecordStoreDAO':
        with self._lock:
            self._records = copy.deepcopy(records)
        return self
