"""Log utilities."""

import logging
from rich.logging import RichHandler


def get_logger(name: str, level: int | str = logging.DEBUG) -> logging.Logger:
    """Retrieve logger with the provided name, rendered through Rich."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = [RichHandler(show_path=False)]
    logger.propagate = False
    return logger
