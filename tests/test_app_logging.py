"""Tests for logging configuration."""

import logging

from chili_diary.api.app import create_app
from chili_diary.app_logging import LOGGER_NAME, configure_logging


def test_repeated_configuration_keeps_one_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    configure_logging()

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_level_names_are_accepted_and_updated() -> None:
    logger = configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging(logging.WARNING)

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_app_factory_applies_configured_level(container) -> None:
    container.settings.log_level = "ERROR"

    create_app(container)

    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
    configure_logging()
