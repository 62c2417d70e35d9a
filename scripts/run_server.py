import argparse
import logging

import uvicorn

from rmcatalog.config import get_settings
from rmcatalog.core.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the raw materials dashboard.")
    parser.add_argument("--host", default="::", help="Interface to bind (default: all, IPv6 and IPv4).")
    parser.add_argument("--port", type=int, default=8080, help="Port to listen on.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    settings = get_settings()

    logger.info(
        "Starting %s on %s:%s (catalog API %s)",
        settings.APP_NAME,
        args.host,
        args.port,
        settings.CATALOG_API_URL,
    )
    uvicorn.run(
        "rmcatalog.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
