"""Command-line entry point: `python -m urlshortener` or `urlshortener`."""

import logging

import uvicorn

from urlshortener.api import create_app
from urlshortener.utils import initialize_logging, load_config


logger = logging.getLogger(__name__)


def main() -> None:
    initialize_logging()
    config = load_config()
    server = config['server']

    app = create_app(config)
    logger.info('Server running on port %s.', server['port'], extra={'host': server['host']})
    uvicorn.run(app, host=server['host'], port=server['port'], log_config=None)


if __name__ == '__main__':
    main()
