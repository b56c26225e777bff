"""Logging configuration.

Environment variables:
- LEDGERBOOK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s %(message)s"
HANDLER_NAME = "ledgerbook-console"


def configure_logging(level: Optional[str] = None) -> None:
    """Send ledgerbook logs to stderr at the given level.

    Calling this again re-targets the existing handler at the current
    ``sys.stderr`` instead of adding a second one.

    Args:
        level: Level name; falls back to LEDGERBOOK_LOG_LEVEL, then WARNING

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or os.environ.get("LEDGERBOOK_LOG_LEVEL") or "WARNING").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level_name}'")

    logger = logging.getLogger("ledgerbook")
    logger.setLevel(numeric_level)

    for handler in logger.handlers:
        if handler.get_name() == HANDLER_NAME:
            handler.setStream(sys.stderr)
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
