from __future__ import annotations

import logging

import pytest

from app.config import Settings, get_settings
from app.logging_config import LOG_FORMAT, get_logger, init_logging


def test_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.locale == "en"
    assert settings.log_level == "INFO"


def test_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STEP_EXPRESSIONS_LOCALE", "de-DE")
    monkeypatch.setenv("STEP_EXPRESSIONS_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.locale == "de-DE"
    assert settings.log_level == "DEBUG"


def test_validation() -> None:
    with pytest.raises(ValueError, match="log_level"):
        Settings(_env_file=None, log_level="chatty")

    with pytest.raises(ValueError, match="locale"):
        Settings(_env_file=None, locale="  ")


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


def test_init_logging_sets_library_levels() -> None:
    init_logging("DEBUG")
    try:
        assert get_logger("tools").level == logging.DEBUG
        assert get_logger("infrastructure").getEffectiveLevel() == logging.DEBUG
        assert "%(levelname)s" in LOG_FORMAT
    finally:
        for name in ("domain", "infrastructure", "tools"):
            logging.getLogger(name).setLevel(logging.NOTSET)
