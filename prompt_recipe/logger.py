"""Logging setup for the prompt_recipe package."""

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "prompt_recipe"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

# Library default: silent unless the application configures logging.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(
    level: LogLevel = "warning", console: Console | None = None
) -> logging.Logger:
    """Attach a rich handler to the package logger.

    Calling this again replaces the previously installed handler.

    Args:
        level: Minimum level to emit
        console: Console to write to (defaults to stderr)

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("{name} - {message}", style="{"))

    for existing in list(logger.handlers):
        if isinstance(existing, RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    set_verbosity(level)

    return logger


def set_verbosity(level: LogLevel) -> None:
    """Set the package logger and all of its handlers to ``level``."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.setLevel(level.upper())
