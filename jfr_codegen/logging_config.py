"""Logging configuration for jfr_codegen.

Modules obtain their logger through :func:`get_logger`; the console
application installs a rich handler once through :func:`setup_logging`.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "jfr_codegen"


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package logger.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """Configure the package logger with a rich handler.

    Calling it again only updates the level.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        console: Console to log to, stderr by default.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
