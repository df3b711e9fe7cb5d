"""Tests for logger setup."""

import logging

import pytest

from engine_link.log import setup_logger


@pytest.fixture
def log_file(tmp_path):
    yield tmp_path / "logs" / "engine.log"
    logger = logging.getLogger("engine_link")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_debug_logger_writes_traffic(log_file):
    logger = setup_logger(debug=True, log_file=log_file)
    logger.getChild("session").debug("--> isready")

    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "[DEBUG] --> isready" in log_file.read_text()


def test_info_level_and_single_handler(log_file):
    setup_logger(debug=True, log_file=log_file)
    logger = setup_logger(debug=False, log_file=log_file)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
