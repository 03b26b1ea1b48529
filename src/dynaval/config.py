"""
Dynaval Configuration

Environment driven settings and logging setup.

Environment variables:
    DV_LOG_LEVEL              Level of the "dynaval" logger (default INFO)
    DV_LOG_JSON               "true" for JSON log lines (default true)
    DV_STRICT_SCHEMA_VERSION  Reject schema packs of another major version (default true)
    DV_DEFAULT_DATE_FORMAT    strptime format of date_string nodes loaded
                              from packs without a format (default %Y-%m-%d)

The library itself never installs handlers; applications call
configure_logging() once at startup.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from .models import DEFAULT_DATE_FORMAT

LOGGER_NAME = "dynaval"

_LOG_EXTRAS = ("path", "code", "schema_id", "error_count", "duration_ms")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_json: bool = True
    strict_schema_version: bool = True
    default_date_format: str = DEFAULT_DATE_FORMAT

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            log_level=os.getenv("DV_LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("DV_LOG_JSON", "true"),
            strict_schema_version=_env_flag("DV_STRICT_SCHEMA_VERSION", "true"),
            default_date_format=os.getenv("DV_DEFAULT_DATE_FORMAT", DEFAULT_DATE_FORMAT),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings read from the environment on first use."""
    return Settings.from_env()


# =============================================================================
# Logging
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _LOG_EXTRAS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a stream handler to the "dynaval" logger.

    Calling it again replaces the handler installed by the previous call.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        if getattr(handler, "_dynaval_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._dynaval_handler = True
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
