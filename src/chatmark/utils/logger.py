"""Minimal logging utilities for chatmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from chatmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tokenizing message")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger under the "chatmark." namespace, so
    applications can silence or raise the whole package with one logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("renderer")
        >>> logger.name
        'chatmark.renderer'
    """
    if not (name == "chatmark" or name.startswith("chatmark.")):
        name = f"chatmark.{name}"
    return logging.getLogger(name)
