# -*- coding: utf-8 -*-
"""Sets up the package logger for spatialbridge.

Library modules only ever call ``logging.getLogger(__name__)``; applications call
:func:`setup_logging` once to decide where those records go.
"""

import logging
import sys

from .config import LOG_LEVEL


def setup_logging(level=None, log_file=None):
    """Configure the 'spatialbridge' logger.

    Parameters:
    -----------
    level : int or str, optional
        Logging level. Defaults to the SPATIALBRIDGE_LOG_LEVEL environment variable.
    log_file : str, optional
        Path to also write log records to

    Returns:
    --------
    logger : logging.Logger
        The configured package logger
    """
    if level is None:
        level = LOG_LEVEL

    logger = logging.getLogger("spatialbridge")
    logger.setLevel(level)

    # avoid duplicate records when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
