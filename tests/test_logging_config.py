from __future__ import annotations

import logging

import pytest

from bubbleoverlay.logging_config import LOGGER_NAME
from bubbleoverlay.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


def test_repeated_setup_does_not_stack_handlers() -> None:
    setup_logging()
    logger = setup_logging(logging.DEBUG)

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_log_file_receives_package_records(tmp_path) -> None:
    log_file = tmp_path / "overlay.log"
    logger = setup_logging(logging.INFO, log_file=log_file)
    assert len(logger.handlers) == 2

    logging.getLogger("bubbleoverlay.BubbleOverlayChart").info("rendered %d", 3)
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "INFO" in text
    assert "bubbleoverlay.BubbleOverlayChart: rendered 3" in text
