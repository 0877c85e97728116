"""Logging setup shared by the CLI and library callers."""

from __future__ import annotations

from typing import Iterable
import logging


DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int | str = logging.INFO,
    *,
    handlers: Iterable[logging.Handler] | None = None,
) -> logging.Logger:
    """Configure the package logger with a stream handler unless handlers are given."""

    logger = logging.getLogger("pic2speak_admin")
    logger.setLevel(level)

    if handlers is None:
        if logger.handlers:
            return logger
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(stream_handler)
    else:
        for handler in handlers:
            logger.addHandler(handler)

    return logger
