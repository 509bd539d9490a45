"""Package logger shared by every calculator_engine module."""
import logging
import sys

LOGGER_NAME = "calculator_engine"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logger(level: str = "WARNING") -> logging.Logger:
    """
    Attach a stderr handler to the package logger (once) and set its level.

    :param str level: Standard logging level name

    :return: The configured package logger
    :rtype: logging.Logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    return package_logger


logger = configure_logger()
