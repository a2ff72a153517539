"""Abstract base class for record store data access objects (DAOs).

A record store holds every record of one kind (API keys, short URLs) as a
single mapping from identifier to a JSON-like record. Reads and writes work on
the whole mapping; `get`, `put` and `list` are conveniences layered on top.

Responsibilities:
    - Provide an interface for reading and replacing the entire mapping.
    - Standardize error handling across data store implementations.
    - Serialize read-modify-write sequences within one process.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.dao.json import JsonRecordStoreDAO

        >>> store = JsonRecordStoreDAO('data/urls.json')
        >>> store.put('1a2b3c4d', {'originalUrl': 'https://example.com', ...})
        <JsonRecordStoreDAO>

        >>> store.get('1a2b3c4d')['originalUrl']
        'https://example.com'

        >>> with store.transaction():
        ...     record = store.get('1a2b3c4d')
        ...     store.put('1a2b3c4d', {**record, 'userId': 'u2'})

NOTE:
    - The lock held by `transaction()` is process-local. Two processes sharing
      one backing document can still overwrite each other's changes.
"""

import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from collections.abc import Iterator

from urlshortener.types import Record, RecordMapping, RecordPredicate
from urlshortener.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class RecordStoreBaseDAO(ABC):
    """Interface for record store data access objects (DAOs).

    Methods:
        read() -> RecordMapping:
            Return the entire mapping. Empty if nothing has been stored yet.
            Raises RecordParseError if the stored document can't be parsed.
            Raises DataStoreError on read failure.

        write(records: RecordMapping) -> RecordStoreBaseDAO:
            Replace the entire mapping.
            Raises DataStoreError on write failure.

        get(record_id: str) -> Record | None:
            Return a single record, or None if absent.

        put(record_id: str, record: Record) -> RecordStoreBaseDAO:
            Insert or overwrite a single record.

        list(predicate: RecordPredicate | None) -> RecordMapping:
            Return all records matching `predicate(record_id, record)`.

        transaction() -> ContextManager:
            Hold the store's lock across several calls.

        ping() -> bool:
            Report whether the backing store can currently be read.

    Subclassing:
        Datastore-specific implementations (e.g., JsonRecordStoreDAO or
        RedisRecordStoreDAO) must implement `read()` and `write()`. They may
        override `get()` and `put()` when the backend supports cheaper
        single-record access, and must call `super().__init__()`.
    """

    def __init__(self):
        self._lock = threading.RLock()

    @abstractmethod
    def read(self) -> RecordMapping:
        """Return the entire mapping of identifiers to records

        Returns:
            RecordMapping: all stored records, {} if none were ever written.

        Raises:
            RecordParseError:
                If the stored document exists but isn't a JSON object.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def write(self, records: RecordMapping) -> 'RecordStoreBaseDAO':
        """Replace the entire mapping of identifiers to records

        Args:
            records (RecordMapping):
                Complete mapping to persist.

        Returns:
            RecordStoreBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def get(self, record_id: str) -> Record | None:
        with self._lock:
            return self.read().get(record_id)

    def put(self, record_id: str, record: Record) -> 'RecordStoreBaseDAO':
        """Insert or overwrite a single record (read-modify-write of the whole mapping)."""
        with self._lock:
            records = self.read()
            records[record_id] = record
            return self.write(records)

    def list(self, predicate: RecordPredicate | None = None) -> RecordMapping:
        with self._lock:
            records = self.read()
        if predicate is None:
            return records
        return {record_id: record for record_id, record in records.items() if predicate(record_id, record)}

    def ping(self) -> bool:
        """Check the store by reading it. Unreadable or unparsable stores report False."""
        try:
            self.read()
        except DataStoreError:
            logger.warning('Record store is unavailable.', extra={'store': repr(self)}, exc_info=True)
            return False
        return True

    @contextmanager
    def transaction(self) -> Iterator['RecordStoreBaseDAO']:
        """Hold the store's re-entrant lock for the duration of the block."""
        with self._lock:
            yield self

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
