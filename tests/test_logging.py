"""Tests for configure_logging in development / testing mode."""
import logging

from flask.logging import default_handler

from models.accounts import AccountType
from services.account_service import AccountService


def test_module_loggers_log_to_console(app):
    for name in ('services', 'utils'):
        module_logger = logging.getLogger(name)
        assert module_logger.level == logging.DEBUG
        assert default_handler in module_logger.handlers


def test_service_writes_are_logged(person, caplog):
    with caplog.at_level(logging.INFO, logger='services'):
        AccountService.create_account('Work RRSP', AccountType.RRSP, person.id)
    assert 'Created account Work RRSP' in caplog.text
