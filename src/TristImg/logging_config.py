# -*- coding: utf-8 -*-
"""
Logging configuration.

Sets up the ``TristImg`` package logger. Library modules only create
module loggers (``logging.getLogger(__name__)``); the command line calls
:func:`setup_logging` once at startup.
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: Union[str, int] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the logger of the 'TristImg' namespace.

    Args:
        level: Logging level, e.g. logging.DEBUG or "DEBUG".
        log_file: Optional path to also save logs to a file.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("TristImg")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once
    if logger.hasHandlers():
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w",
                                           encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
