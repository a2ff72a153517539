from enum import StrEnum


class ApiKeyPolicy:
    """API key lifetime and quota."""

    EXPIRATION_DAYS = 30  # Keys expire 30 days after creation
    MAX_KEYS_PER_USER = 5  # Revoked keys count toward this limit


class TokenBytes:
    """Random byte lengths of generated identifiers (hex-encoded, so twice as many chars)."""

    API_KEY = 16  # 128 bits
    USER_ID = 8  # 64 bits
    SHORT_ID = 4  # 32 bits


class StoreName(StrEnum):
    API_KEYS = 'api-keys'
    URLS = 'urls'


class StoreBackend(StrEnum):
    JSON = 'json'
    MEMORY = 'memory'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        CONFIG_FILE = 'CONFIG_FILE'
        LOG_LEVEL = 'LOG_LEVEL'

    class Server(StrEnum):
        HOST = 'HOST'
        PORT = 'PORT'

    class Store(StrEnum):
        BACKEND = 'STORE_BACKEND'
        DATA_DIR = 'DATA_DIR'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105


# Defaults
DEFAULT_HOST = '0.0.0.0'  # noqa: S104
DEFAULT_PORT = 3000
DEFAULT_DATA_DIR = 'data'

# HTTP header carrying the caller's API key
API_KEY_HEADER = 'X-API-Key'
