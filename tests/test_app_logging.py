"""Tests for logging configuration."""

import logging

from zola_studio.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("zola_studio")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_quiets_http_client() -> None:
    configure_logging(level=logging.DEBUG)

    assert logging.getLogger("zola_studio").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
