"""Process-wide logging setup for the feedback library.

Modules log through ``logging.getLogger(__name__)``; applications embedding the
library call :func:`configure_logging` once to attach a handler to the package
logger.
"""
from __future__ import annotations

import logging

from feedback_app.core.config import LoggingSettings, settings

PACKAGE_LOGGER = "feedback_app"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: LoggingSettings | None = None) -> logging.Logger:
    config = config or settings.logging
    logger = logging.getLogger(PACKAGE_LOGGER)

    if logger.handlers:
        return logger

    logger.setLevel(config.level)
    logger.propagate = False

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8", delay=True)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    return logger
