"""Entry point for a standalone, read-only Newswire web server."""

from __future__ import annotations

import logging

import uvicorn

from newswire.log import setup_logging
from newswire.web.app import create_app
from newswire.web.config import load_web_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the articles API without running any ingestion."""
    config = load_web_config()
    setup_logging(config.log_level, config.log_format)

    logger.info("Serving %s on %s:%d", config.database_path, config.web_host, config.web_port)
    app = create_app(config)
    uvicorn.run(app, host=config.web_host, port=config.web_port)


if __name__ == "__main__":
    main()
