"""Tests for logging setup."""

import logging

from common.logging_config import get_logger, setup_logging


def test_setup_logging_is_idempotent():
    logger = setup_logging('tbf-test-component', log_level='debug')
    again = setup_logging('tbf-test-component')

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'error')
    logger = setup_logging('tbf-test-env')
    assert logger.level == logging.ERROR


def test_unknown_level_falls_back_to_info():
    logger = setup_logging('tbf-test-unknown', log_level='chatty')
    assert logger.level == logging.INFO


def test_child_loggers_share_component_handler():
    setup_logging('tbf-test-parent', log_level='WARNING')
    child = get_logger('tbf-test-parent.child')
    assert child.getEffectiveLevel() == logging.WARNING
