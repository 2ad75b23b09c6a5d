from __future__ import annotations

import logging

import pytest

from feedback_app.core.config import LoggingSettings
from feedback_app.core.logging import PACKAGE_LOGGER, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


def test_configure_logging_is_idempotent(package_logger) -> None:
    first = configure_logging(LoggingSettings(level="DEBUG"))
    second = configure_logging(LoggingSettings(level="ERROR"))

    assert first is second is package_logger
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_configure_logging_writes_to_file(package_logger, tmp_path) -> None:
    log_file = tmp_path / "logs" / "feedback.log"
    configure_logging(LoggingSettings(level="INFO", log_file=log_file))

    logging.getLogger("feedback_app.services.wizard").info("Submitted survey configuration abc")
    for handler in package_logger.handlers:
        handler.flush()

    assert "Submitted survey configuration abc" in log_file.read_text(encoding="utf-8")
