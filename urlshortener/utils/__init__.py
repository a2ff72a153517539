from urlshortener.utils.config import app_env, app_name, app_prefix, project_root, load_config
from urlshortener.utils.helpers import utcnow, to_timestamp, from_timestamp, base_url, get_short_url, mask_api_key
from urlshortener.utils.shortener import generate_api_key, generate_user_id, generate_short_id, is_valid_url, normalize_url
from urlshortener.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'utcnow',
    'to_timestamp',
    'from_timestamp',
    'base_url',
    'get_short_url',
    'mask_api_key',
    'generate_api_key',
    'generate_user_id',
    'generate_short_id',
    'is_valid_url',
    'normalize_url',
    'initialize_logging',
]
