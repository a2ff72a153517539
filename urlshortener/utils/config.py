"""Utility functions for application configuration management.

Configuration is resolved in three layers, later layers winning:

    1. Built-in defaults.
    2. An optional YAML document: `$CONFIG_FILE` when set, otherwise
       `<project root>/config/<APP_ENV>.yml` when that file exists.
    3. Environment variables (PORT, HOST, STORE_BACKEND, DATA_DIR, REDIS_*).

The resolved configuration is a plain dictionary:

    {
        "server": {"host": "0.0.0.0", "port": 3000},
        "store": {
            "backend": "json",
            "data_dir": "data",
            "redis": {"host": "localhost", "port": 6379, "db": 0,
                      "username": null, "password": null}
        }
    }

Example YAML document (config/dev.yml):

    server:
      port: 8080
    store:
      backend: redis
      redis:
        host: redis.internal

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for Redis-backed stores, or None if `APP_NAME`
        is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_yaml(path: Path) -> dict
        Parse a YAML mapping from disk.

    load_config() -> AppConfig
        Resolve the full configuration.

Example:
    >>> os.environ['PORT'] = '8080'
    >>> load_config()['server']['port']
    8080
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from urlshortener.types import AppConfig
from urlshortener.exceptions import BadConfigurationError
from urlshortener.constants import (
    ENV,
    StoreBackend,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_DATA_DIR,
)


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: AppConfig = {
    'server': {
        'host': DEFAULT_HOST,
        'port': DEFAULT_PORT,
    },
    'store': {
        'backend': StoreBackend.JSON.value,
        'data_dir': DEFAULT_DATA_DIR,
        'redis': {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
            'username': None,
            'password': None,
        },
    },
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return key prefix for Redis-backed record stores

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads PROJECT_ROOT and falls back to the current working directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd())).resolve()


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file into a Python dictionary.

    Args:
        path (Path):
            Path to a YAML file.

    Returns:
        dict[str, Any]:
            Parsed YAML document. Returns {} for empty files.

    Raises:
        FileNotFoundError:
            If the file does not exist.

        BadConfigurationError:
            If the file isn't valid YAML or doesn't hold a mapping.
    """
    if not path.is_file():
        raise FileNotFoundError(f'YAML not found: {path}')

    try:
        with path.open('r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Invalid YAML in config file {path}.') from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadConfigurationError(f'Config file {path} must hold a mapping (found {type(data).__name__}).')
    return data


def _config_file() -> Path | None:
    explicit = os.environ.get(ENV.App.CONFIG_FILE)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            raise BadConfigurationError(f'Config file {path} (from {ENV.App.CONFIG_FILE}) does not exist.')
        return path

    path = project_root() / 'config' / f'{app_env()}.yml'
    return path if path.is_file() else None


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"'{name}' must be an integer (given value: {value!r}).") from e


def _env_overrides() -> dict[str, Any]:
    # fmt: off
    mapping = [
        (ENV.Server.HOST,     ('server', 'host')),
        (ENV.Server.PORT,     ('server', 'port')),
        (ENV.Store.BACKEND,   ('store', 'backend')),
        (ENV.Store.DATA_DIR,  ('store', 'data_dir')),
        (ENV.Redis.HOST,      ('store', 'redis', 'host')),
        (ENV.Redis.PORT,      ('store', 'redis', 'port')),
        (ENV.Redis.DB,        ('store', 'redis', 'db')),
        (ENV.Redis.USERNAME,  ('store', 'redis', 'username')),
        (ENV.Redis.PASSWORD,  ('store', 'redis', 'password')),
    ]
    # fmt: on

    overrides: dict[str, Any] = {}
    for env_name, path in mapping:
        value = os.environ.get(env_name)
        if value is None or value == '':
            continue
        node = overrides
        for part in path[:-1]:
            node = node.setdefault(part, {})
        node[path[-1]] = value
    return overrides


def _validate(config: AppConfig) -> AppConfig:
    for section in ('server', 'store'):
        if not isinstance(config.get(section), dict):
            raise BadConfigurationError(f"'{section}' must be a mapping.")
    if not isinstance(config['store'].get('redis'), dict):
        raise BadConfigurationError("'store.redis' must be a mapping.")

    server = config['server']
    store = config['store']
    redis_config = store['redis']

    server['port'] = _as_int(server['port'], 'server.port')
    if not 0 < server['port'] < 65536:
        raise BadConfigurationError(f"'server.port' must be between 1 and 65535 (given value: {server['port']}).")

    backend = str(store['backend']).lower()
    if backend not in set(StoreBackend):
        allowed = ', '.join(f"'{b}'" for b in StoreBackend)
        raise BadConfigurationError(f"'store.backend' must be one of {allowed} (given value: {store['backend']!r}).")
    store['backend'] = backend
    store['data_dir'] = str(store['data_dir'])

    redis_config['port'] = _as_int(redis_config['port'], 'store.redis.port')
    redis_config['db'] = _as_int(redis_config['db'], 'store.redis.db')
    return config


def load_config() -> AppConfig:
    """Resolve the application's configuration

    Returns:
        AppConfig: configuration dictionary (see module docstring)

    Raises:
        BadConfigurationError:
            If the config file is missing (when set explicitly), malformed,
            or any value is invalid.

    Example:
        >>> config = load_config()
        >>> config['store']['backend']
        'json'
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = _config_file()
    if path is not None:
        logger.debug('Loading config file.', extra={'path': str(path)})
        config = _merge(config, load_yaml(path))

    config = _merge(config, _env_overrides())
    return _validate(config)
