#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "bubbleoverlay"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def _make_handler(
    handler: logging.Handler,
    level: int,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: None | str | Path = None,
) -> logging.Logger:
    """
    Route the package's log records to stderr (and optionally a file).

    Repeated calls replace the handlers installed by earlier calls, so the
    CLI can be invoked many times in one process.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Path of a log file, truncated on open

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level))
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        logger.addHandler(_make_handler(file_handler, level))

    logger.debug("Logging at %s", logging.getLevelName(level))
    return logger
