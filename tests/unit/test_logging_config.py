"""
Unit tests for logging setup.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from pingwatch.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _restore_pingwatch_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_console_only_by_default() -> None:
    logger = setup_logging(level="debug", to_file=False)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], RotatingFileHandler)
    assert logger.propagate is False


def test_file_logging_creates_directory(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "pingwatch.log"
    logger = setup_logging(to_file=True, log_file=str(log_file), console=False)

    logging.getLogger("pingwatch.monitor").warning("probe failed for gw")
    for handler in logger.handlers:
        handler.flush()

    assert "probe failed for gw" in log_file.read_text(encoding="utf-8")


def test_setup_is_repeatable() -> None:
    setup_logging(to_file=False)
    logger = setup_logging(to_file=False)
    assert len(logger.handlers) == 1
