"""Shared logger for the calculator."""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "arithmetic_repl"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)
# Silent until configure_logging is called
logger.addHandler(logging.NullHandler())

# Handler installed by configure_logging, if any
_stderr_handler: Optional[logging.Handler] = None


def configure_logging(level: Union[int, str] = logging.WARNING) -> logging.Logger:
    """
    Attach a stderr handler to the package logger and set its level.

    Calling it again only updates the level, the stderr handler is not
    duplicated. Handlers attached by the application (files, ...) are left alone.

    :param level: Logging level name (e.g. "INFO") or numeric value

    :return: The configured package logger
    :rtype: logging.Logger
    """
    global _stderr_handler

    if isinstance(level, str):
        level = level.upper()
    if _stderr_handler is None or _stderr_handler not in logger.handlers:
        _stderr_handler = logging.StreamHandler(sys.stderr)
        _stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_stderr_handler)
    logger.setLevel(level)
    return logger
