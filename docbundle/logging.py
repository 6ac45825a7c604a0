"""Logging utilities for docbundle commands and the service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

_LOGGER_NAME = "docbundle"
# uvicorn.error and uvicorn.access propagate here once uvicorn leaves logging alone.
SERVICE_LOGGER_NAME = "uvicorn"

CONSOLE_FORMAT = "[docbundle] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docbundle hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    service: bool = False,
) -> logging.Logger:
    """Send docbundle logs to the console and, optionally, to ``log_file``.

    With ``service=True`` the uvicorn server logs share the same handlers so a
    running service writes one consistent stream.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers = _build_handlers(level, log_file)

    logger = _install(logging.getLogger(_LOGGER_NAME), level, handlers)
    if service:
        _install(logging.getLogger(SERVICE_LOGGER_NAME), level, handlers)
    return logger


def _build_handlers(level: int, log_file: Path | None) -> List[logging.Handler]:
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [stream_handler]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)
    return handlers


def _install(logger: logging.Logger, level: int, handlers: List[logging.Handler]) -> logging.Logger:
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
