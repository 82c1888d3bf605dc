"""Shared logger for the calculator package."""
import logging
import sys

LOGGER_NAME = "interactive_calculator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Log levels accepted on the command line
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_logger() -> logging.Logger:
    """
    Create the package logger with a single stderr handler.

    Logs go to stderr so they never mix with results printed on stdout.
    Default level is WARNING to keep the interactive prompt clean.

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(logging.WARNING)
    return log


def set_level(level: str) -> None:
    """
    Change the level of the package logger.

    :param str level: One of LOG_LEVELS
    """
    logger.setLevel(level.upper())


logger: logging.Logger = _build_logger()
