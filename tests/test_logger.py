"""Tests for logger setup."""

import logging

from rich.logging import RichHandler

from utils.logger import PACKAGE_LOGGERS, bind_package_loggers, setup_logger


def test_setup_logger_uses_rich_handler():
    logger = setup_logger("oorlogsbronnen.rich-test", level="DEBUG")

    assert logger.level == logging.DEBUG
    assert any(isinstance(handler, RichHandler) for handler in logger.handlers)


def test_bind_package_loggers_covers_every_package():
    logger = setup_logger("oorlogsbronnen.bind-test", level="WARNING", use_rich=False)

    bind_package_loggers(logger)

    for package in ("aggregator", "scrapers", "processing", "outputs", "models", "config", "utils"):
        assert package in PACKAGE_LOGGERS
        package_logger = logging.getLogger(package)
        assert package_logger.handlers == logger.handlers
        assert package_logger.level == logging.WARNING
        assert package_logger.propagate is False
