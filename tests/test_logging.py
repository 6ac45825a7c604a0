"""Tests for logger configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from docbundle.logging import SERVICE_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture(autouse=True)
def _restore_loggers():
    names = ("docbundle", SERVICE_LOGGER_NAME)
    saved = {
        name: (logging.getLogger(name).level, logging.getLogger(name).propagate, list(logging.getLogger(name).handlers))
        for name in names
    }
    yield
    for name, (level, propagate, handlers) in saved.items():
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = propagate


def test_get_logger_nests_under_package() -> None:
    assert get_logger().name == "docbundle"
    assert get_logger("sources").name == "docbundle.sources"


def test_reconfiguring_does_not_duplicate_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_log_file_receives_module_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "docbundle.log"
    logger = configure_logging(log_file=log_file)

    get_logger("pipeline").info("Step 1: fetching external sources")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO docbundle.pipeline: Step 1: fetching external sources" in content


def test_service_mode_shares_handlers_with_uvicorn() -> None:
    logger = configure_logging(service=True)
    server_logger = logging.getLogger(SERVICE_LOGGER_NAME)

    assert server_logger.handlers == logger.handlers
    assert server_logger.level == logging.INFO


def test_cli_mode_leaves_uvicorn_alone() -> None:
    server_logger = logging.getLogger(SERVICE_LOGGER_NAME)
    before = list(server_logger.handlers)

    configure_logging()

    assert server_logger.handlers == before
