"""Модуль конфигурации библиотеки."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ROOT_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = ROOT_DIR / ".env"

# Загружаем переменные только если файл существует, чтобы избежать лишних предупреждений
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=False)


class Settings(BaseSettings):
    """Основные настройки библиотеки."""

    model_config = SettingsConfigDict(
        env_prefix="STEP_EXPRESSIONS_",
        env_file=ENV_PATH,
        case_sensitive=False,
        extra="ignore",
    )

    locale: str = Field(default="en", description="Локаль встроенных типов параметров")
    log_level: str = Field(default="INFO", description="Уровень логирования")

    @field_validator("locale")
    @classmethod
    def _validate_locale(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("locale must not be empty")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got {value!r}")
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Получить настройки с кешированием."""

    settings = Settings()
    logging.getLogger(__name__).debug("Config loaded: %s", settings.model_dump())
    return settings
