"""
Logging configuration for the calc-extract service.
"""

import logging
import sys
from typing import Optional


def setup_logging(level=logging.INFO, format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure root logging to stdout.

    Args:
        level: logging level (DEBUG, INFO, ...)
        format_string: custom format string (default provided)
    """
    if format_string is None:
        format_string = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger = logging.getLogger("calcextract")
    logger.info(f"logging initialized (level={logging.getLevelName(level)})")
    return logger
