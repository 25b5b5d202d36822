"""Main entry point for the research article relay."""

import logging
import os
import sys

from .config import load_config
from .scheduler import run_forever

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Load configuration, then relay articles until the process is stopped."""
    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logger.info(
        f"Relaying {config.scraper.url} to chat {config.telegram.chat_id} "
        f"(policy={config.scheduler.novelty_policy}, state={config.state_path})"
    )
    try:
        run_forever(config)
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
