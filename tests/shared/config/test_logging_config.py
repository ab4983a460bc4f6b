# -*- coding: utf-8 -*-
"""
backend/tests/shared/config/test_logging_config.py

setup_logging: formato por LOG_FORMAT y nivel raíz por LOG_LEVEL.
"""

import logging

import pytest

from app.shared.config.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _console_formatter():
    handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler)]
    assert handlers, "se esperaba un handler de consola en el root"
    return handlers[0].formatter


def test_plain_format_and_level():
    setup_logging(level="DEBUG", fmt="plain")

    assert logging.getLogger().level == logging.DEBUG
    assert _console_formatter()._fmt == "%(levelname)s [%(name)s]: %(message)s"
    logging.getLogger("app.test").debug("webhook_received webhook_id=%s", "x")


def test_pretty_format_has_timestamp():
    setup_logging(level="INFO", fmt="pretty")
    assert "%(asctime)s" in _console_formatter()._fmt


def test_json_format_uses_python_json_logger():
    setup_logging(level="WARNING", fmt="json")

    formatter = _console_formatter()
    assert formatter.__class__.__module__.startswith("pythonjsonlogger")
    assert logging.getLogger().level == logging.WARNING


def test_sqlalchemy_engine_is_quiet():
    setup_logging(level="DEBUG", fmt="plain")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
