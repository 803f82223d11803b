"""Pytest configuration and shared fixtures."""

import logging

import pytest
import structlog

from jcal.config import reset_jcal_config


def _reset_logging():
    structlog.reset_defaults()
    jcal_logger = logging.getLogger("jcal")
    for handler in list(jcal_logger.handlers):
        jcal_logger.removeHandler(handler)
    jcal_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_jcal_config_for_all_tests():
    """Reset module-level defaults and logging before and after each test.

    jcal's configuration is a module-level singleton that persists across
    tests. This fixture ensures each test starts from the defaults.
    """
    reset_jcal_config()
    _reset_logging()
    yield
    reset_jcal_config()
    _reset_logging()
