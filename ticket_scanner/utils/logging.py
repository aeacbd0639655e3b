"""
Logging utilities for the Ticket Scanner app.

Privacy rules for every logger in the project:
- NEVER log raw receipt images or binary data
- NEVER log the full model reply (it contains the purchase contents)
- NEVER log the login password, session cookie or API keys

Acceptable logging:
- High-level events (e.g., "Ticket extraction completed")
- Identifiers and counts (e.g., "ticket_id=rec123, lines=4")
- Error messages from the model or the datastore
"""

import logging
from typing import Optional, Union

from ticket_scanner.config import settings


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to LOG_LEVEL)

    Returns:
        Configured logger instance

    Usage:
        >>> from ticket_scanner.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # basicConfig in main.py installs a root handler too
        logger.propagate = False

    return logger
