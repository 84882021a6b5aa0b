import logging
from decimal import Decimal

from billsplit.core.config import Settings, configure_logging, settings


def test_default_settings():
    assert settings.SPLIT_TOLERANCE == Decimal("0.01")
    assert settings.PERCENTAGE_TOLERANCE == Decimal("0.1")
    assert settings.SETTLED_THRESHOLD == Decimal("0.01")
    assert settings.MAX_ITERATION_FACTOR == 2


def test_settings_read_prefixed_environment(monkeypatch):
    monkeypatch.setenv("BILLSPLIT_SPLIT_TOLERANCE", "0.05")
    monkeypatch.setenv("BILLSPLIT_LOG_LEVEL", "DEBUG")

    overridden = Settings()

    assert overridden.SPLIT_TOLERANCE == Decimal("0.05")
    assert overridden.LOG_LEVEL == "DEBUG"


def test_configure_logging_sets_package_level():
    logger = logging.getLogger("billsplit")
    previous = logger.level
    try:
        assert configure_logging("debug") is logger
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)


def test_import_leaves_package_logger_level_alone():
    # The embedding application decides when to call configure_logging
    assert logging.getLogger("billsplit").level == logging.NOTSET
