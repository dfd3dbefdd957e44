# Copyright 2026 slmodel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the logging setup helper."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from slmodel.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    """Put the namespace logger back the way it was after each test."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def test_console_handler() -> None:
    """A single console handler is installed at the requested level."""
    logger = setup_logging(logging.DEBUG)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_repeated_setup_does_not_duplicate_handlers() -> None:
    """Calling the setup twice replaces the previous handlers."""
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_log_file(tmp_path: Path) -> None:
    """Records from module loggers reach the log file."""
    log_file = tmp_path / "slmodel.log"
    logger = setup_logging(logging.INFO, log_file)
    assert len(logger.handlers) == 2

    logging.getLogger("slmodel.parser.simulink").warning("Subsystem file not found: system_9.xml")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "slmodel.parser.simulink - WARNING - Subsystem file not found: system_9.xml" in text


def test_level_filters_records(tmp_path: Path) -> None:
    """Records below the configured level are dropped."""
    log_file = tmp_path / "slmodel.log"
    setup_logging(logging.WARNING, log_file)
    logging.getLogger("slmodel.mask").info("hidden")
    logging.getLogger("slmodel.mask").error("shown")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "hidden" not in text
    assert "shown" in text
