"""
Logging configuration for codemeasure.

Package loggers go through a rich handler on stderr, so that pass progress
and clamped-value warnings stay out of stdout. A plain-text log file can be
added through the `log_file` setting.

Handlers are attached to the `codemeasure` logger rather than the root
logger, and calling setup_logging() again replaces them, so an embedding
host keeps control of its own logging.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "codemeasure"

LEVELS: Dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Marks handlers installed here so a later call can remove them
_OWNED = "_codemeasure_handler"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the codemeasure logger.

    Args:
        verbosity: One of "quiet" (errors only), "normal" (warnings) or
                   "verbose" (debug output with source paths and locals)
        log_file: Optional file path to append logs to

    Returns:
        The configured codemeasure logger
    """
    try:
        level = LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"unknown verbosity {verbosity!r}") from None
    verbose = verbosity == "verbose"

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, _OWNED, False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _OWNED, True)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'codemeasure.sensor')
              If None, returns the root codemeasure logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
