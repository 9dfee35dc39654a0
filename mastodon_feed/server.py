"""Process entry point for Mastodon Feed."""

import sys

import uvicorn

from .app import create_app
from .config import Config
from .errors import ConfigError
from .logging_config import create_execution_logger, setup_structured_logging


def main() -> int:
    """Load configuration and serve the feeds until interrupted.

    Returns:
        Process exit status; 1 when the configuration is incomplete
    """
    config = Config()
    setup_structured_logging(config.log_level)
    logger = create_execution_logger("server", "startup")

    try:
        app = create_app(config)
        server_config = config.get_server_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.info(
        "Configuration loaded",
        instance=config.instance_url,
        home_instance=server_config.home_instance or None,
    )
    logger.info(f"Serving feeds on {server_config.host}:{server_config.port}")

    uvicorn.run(
        app,
        host=server_config.host,
        port=server_config.port,
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
