# src/qa_suite/core/logging.py
from __future__ import annotations

import logging
from typing import Union

ROOT_LOGGER_NAME = "qa_suite"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Configure the package logger once.

    - Single StreamHandler with a plain formatter.
    - Safe to call repeatedly (e.g. from pytest_configure under xdist); the
      handler is only attached the first time, the level is always updated.
    - Records still propagate so pytest's caplog / live logging see them.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(getattr(h, "_qa_suite", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        handler._qa_suite = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger under the package root, e.g. get_logger("api") -> qa_suite.api."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
