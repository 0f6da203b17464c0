import logging

import pytest

from dam_license.core.logging_config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV_VAR, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    app_logger = logging.getLogger("dam_license")
    level, handlers = app_logger.level, list(app_logger.handlers)
    yield
    app_logger.setLevel(level)
    app_logger.handlers = handlers


def test_level_from_argument() -> None:
    setup_logging("debug")
    assert logging.getLogger("dam_license").level == logging.DEBUG

    setup_logging(logging.ERROR)
    assert logging.getLogger("dam_license").level == logging.ERROR


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, "INFO")
    setup_logging()
    assert logging.getLogger("dam_license").level == logging.INFO


def test_invalid_level_falls_back(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("LOUD")

    assert logging.getLogger("dam_license").level == DEFAULT_LOG_LEVEL
    assert "Invalid" in capsys.readouterr().err


def test_handlers_are_replaced() -> None:
    setup_logging("INFO")
    setup_logging("INFO")
    assert len(logging.getLogger("dam_license").handlers) == 1
