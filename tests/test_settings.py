import logging

import pytest
import structlog
from structlog.testing import capture_logs
from pydantic import ValidationError

from fnkit.config.settings import DEFAULT_LAMBDA_BUILTINS, FnkitSettings, get_settings, reset_settings
from fnkit.lambdas import lambda_
from fnkit.utils.logging import configure_default_logging, configure_logging, get_logger


def test_defaults():
    settings = FnkitSettings()
    assert settings.verbose is False
    assert settings.deprecation_warnings is True
    assert settings.lambda_builtins == set(DEFAULT_LAMBDA_BUILTINS)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FNKIT_VERBOSE", "1")
    monkeypatch.setenv("fnkit_deprecation_warnings", "no")
    settings = FnkitSettings()
    assert settings.verbose is True
    assert settings.deprecation_warnings is False


def test_dunder_builtins_rejected():
    with pytest.raises(ValidationError):
        FnkitSettings(lambda_builtins={"len", "__import__"})


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
    first = get_settings()
    reset_settings()
    assert get_settings() is not first


def test_default_logging_routes_through_stdlib(caplog):
    logger = get_logger("fnkit.test")
    with caplog.at_level(logging.DEBUG, logger="fnkit.test"):
        logger.debug("lambda_compiled", source="=_1")
    assert "lambda_compiled" in caplog.text
    assert "source='=_1'" in caplog.text


def test_configure_logging_reads_settings(monkeypatch):
    monkeypatch.setenv("FNKIT_VERBOSE", "true")
    try:
        configure_logging(colors=False)
        assert structlog.is_configured()
        assert get_logger("fnkit.test") is not None
    finally:
        configure_default_logging()


def test_module_logger_follows_later_configuration():
    with capture_logs() as logs:
        lambda_("|late| late + 1")
    assert {"event": "lambda_compiled", "source": "|late| late + 1",
            "form": "named", "log_level": "debug"} in logs
