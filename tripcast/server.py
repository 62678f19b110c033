"""
Server entrypoint. Run from project root:

  python -m tripcast.server

Host, port and log level come from HOST, PORT and LOG_LEVEL (env or .env).
"""

import logging
import sys

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from tripcast.core.config import get_settings
from tripcast.main import create_app

logger = logging.getLogger(__name__)


def main() -> int:
    """Build the app from settings and serve it until interrupted."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    logger.info("Server is running at http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
