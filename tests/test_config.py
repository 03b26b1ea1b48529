"""
Tests for Dynaval configuration and logging setup
"""
import json
import logging

import pytest

from dynaval.config import (
    LOGGER_NAME,
    JSONFormatter,
    Settings,
    configure_logging,
    get_settings,
)


@pytest.fixture(autouse=True)
def clean_logger():
    """Remove handlers installed by configure_logging after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_dynaval_handler", False):
            logger.removeHandler(handler)
    get_settings.cache_clear()


class TestSettings:
    """Tests for environment driven settings."""

    def test_defaults(self, monkeypatch):
        for name in ("DV_LOG_LEVEL", "DV_LOG_JSON", "DV_STRICT_SCHEMA_VERSION", "DV_DEFAULT_DATE_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings == Settings()
        assert settings.default_date_format == "%Y-%m-%d"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DV_LOG_LEVEL", "debug")
        monkeypatch.setenv("DV_LOG_JSON", "false")
        monkeypatch.setenv("DV_STRICT_SCHEMA_VERSION", "False")
        monkeypatch.setenv("DV_DEFAULT_DATE_FORMAT", "%d-%m-%Y")
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False
        assert settings.strict_schema_version is False
        assert settings.default_date_format == "%d-%m-%Y"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    """Tests for configure_logging and the JSON formatter."""

    def test_configure_logging_replaces_handler(self):
        logger = configure_logging(Settings(log_level="WARNING"))
        configure_logging(Settings(log_level="WARNING"))
        handlers = [h for h in logger.handlers if getattr(h, "_dynaval_handler", False)]
        assert len(handlers) == 1
        assert logger.level == logging.WARNING

    def test_plain_formatter(self):
        logger = configure_logging(Settings(log_json=False))
        handler = next(h for h in logger.handlers if getattr(h, "_dynaval_handler", False))
        assert not isinstance(handler.formatter, JSONFormatter)

    def test_json_formatter(self):
        record = logging.LogRecord(
            name="dynaval.engine.validator",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Validated %s",
            args=("$.email",),
            exc_info=None,
        )
        record.path = "$.email"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "dynaval.engine.validator"
        assert entry["message"] == "Validated $.email"
        assert entry["path"] == "$.email"
        assert "timestamp" in entry
