"""
Logging configuration for the file search bot.

Level comes from LOG_LEVEL (default DEBUG).
"""

import logging
import sys

from filebot.config import get_settings

def setup_logging(level: str | None = None):
    """Setup logging with proper format and handlers."""
    level = (level or get_settings().log_level).upper()

    # Create logger
    logger = logging.getLogger("filebot")
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Create console handler with formatting
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    # Add handler to logger
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger

# Global logger instance
bot_logger = setup_logging()
