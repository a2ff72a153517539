"""Build record stores from the `store` section of the app configuration.

Example:
    >>> from urlshortener.utils import load_config
    >>> store_config = load_config()['store']
    >>> create_record_store(StoreName.URLS, store_config)
    <JsonRecordStoreDAO path='data/urls.json'>
"""

import logging
from pathlib import Path
from typing import Any

from urlshortener.constants import StoreBackend, StoreName
from urlshortener.dao.base import RecordStoreBaseDAO
from urlshortener.dao.exceptions import DataStoreError
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.config import app_prefix


logger = logging.getLogger(__name__)


def ensure_data_dir(data_dir: str | Path) -> Path:
    """Create the JSON data directory (and parents) if it doesn't exist yet.

    Raises:
        DataStoreError: if the directory can't be created
    """
    path = Path(data_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DataStoreError(f"Can't create data directory {path}.") from e
    return path


def create_record_store(name: StoreName, store_config: dict[str, Any]) -> RecordStoreBaseDAO:
    """Instantiate the record store for `name` on the configured backend

    Args:
        name (StoreName): which record store to build
        store_config (dict): the `store` section of the app configuration

    Returns:
        RecordStoreBaseDAO: JSON file, in-memory or Redis-backed store

    Raises:
        BadConfigurationError: on an unknown backend
        DataStoreError: if Redis can't be reached
    """
    backend = store_config['backend']

    if backend == StoreBackend.JSON:
        from urlshortener.dao.json import JsonRecordStoreDAO

        return JsonRecordStoreDAO(Path(store_config['data_dir']) / f'{name}.json')

    if backend == StoreBackend.MEMORY:
        from urlshortener.dao.memory import MemoryRecordStoreDAO

        return MemoryRecordStoreDAO()

    if backend == StoreBackend.REDIS:
        from urlshortener.dao.redis import RedisRecordStoreDAO

        redis_config = {f'redis_{k}': v for k, v in store_config['redis'].items()}
        return RedisRecordStoreDAO(str(name), **redis_config, prefix=app_prefix())

    raise BadConfigurationError(f"Unknown store backend '{backend}'.")
