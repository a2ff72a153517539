"""Data Access Object (DAO) implementation backed by a JSON document on disk

The whole mapping lives in a single pretty-printed JSON file. Every write
serializes the complete mapping to a temporary sibling file and then moves it
over the target with `os.replace()`, so readers never observe a half-written
document.

Classes:
    JsonRecordStoreDAO:
        DAO for storing and retrieving records in one JSON file.

Example:
    >>> from urlshortener.dao.json import JsonRecordStoreDAO

    >>> store = JsonRecordStoreDAO('data/api-keys.json')
    >>> store.read()
    {}
    >>> store.put('3f1c...e9', {'userId': 'a1b2c3d4e5f60718', ...})
    <JsonRecordStoreDAO path='data/api-keys.json'>
"""

import os
import json
import stat
import logging
import tempfile
from pathlib import Path

from beartype import beartype

from urlshortener.types import RecordMapping
from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.dao.exceptions import DataStoreError, RecordParseError


logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


class JsonRecordStoreDAO(RecordStoreBaseDAO):
    """JSON-file-based record store

    Attributes:
        path (Path):
            Location of the JSON document. Its parent directory must exist.

    Methods:
        read() -> RecordMapping:
            Parse the document. Returns {} when the file doesn't exist.
            Raises RecordParseError when the file isn't a JSON object.
            Raises DataStoreError on other I/O failures.

        write(records: RecordMapping) -> JsonRecordStoreDAO:
            Atomically replace the document with `records`.
            Raises DataStoreError on I/O failures.
    """

    def __init__(self, path: str | os.PathLike):
        super().__init__()
        self.path = Path(path)

    def read(self) -> RecordMapping:
        try:
            content = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise DataStoreError(f"Can't read record store at {self.path}.") from e

        try:
            records = json.loads(content.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RecordParseError(f'Record store at {self.path} is not valid JSON.') from e

        if not isinstance(records, dict):
            raise RecordParseError(f'Record store at {self.path} must hold a JSON object (found {type(records).__name__}).')
        if not all(isinstance(record, dict) for record in records.values()):
            raise RecordParseError(f'Record store at {self.path} holds entries which are not JSON objects.')
        return records

    @beartype
    def write(self, records: RecordMapping) -> 'JsonRecordStoreDAO':
        document = json.dumps(records, indent=2, ensure_ascii=False)

        with self._lock:
            tmp_path = None
            try:
                fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(document)
                os.chmod(tmp_path, self._file_mode())
                os.replace(tmp_path, self.path)
            except OSError as e:
                if tmp_path is not None and os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise DataStoreError(f"Can't write record store at {self.path}.") from e

        logger.debug('Wrote record store.', extra={'path': str(self.path), 'records': len(records)})
        return self

    def _file_mode(self) -> int:
        # mkstemp creates 0600 files; keep the existing document's mode instead
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def __repr__(self) -> str:
        return f"<{type(self).__name__} path='{self.path}'>"
