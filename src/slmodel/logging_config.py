# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for applications that use slmodel.

Library modules only create module-level loggers under the ``slmodel``
namespace; nothing is configured on import. Applications call
:func:`setup_logging` once to route those records to the console and,
optionally, to a file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ###############
# Public Interface
# ###############

LOGGER_NAME = "slmodel"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> logging.Logger:
    """Configure the ``slmodel`` namespace logger.

    Existing handlers on the namespace logger are replaced, so calling this
    again does not duplicate output.

    Args:
        level: Logging level (e.g. ``logging.DEBUG`` to see field coercion
            and mask evaluation misses).
        log_file: Optional path of a file that receives the same records.

    Returns:
        The configured namespace logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
