"""Настройка логирования для библиотеки."""
from __future__ import annotations

import logging
from logging import Logger

from app.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def init_logging(level: str | int | None = None) -> None:
    """Инициализировать логирование; уровень по умолчанию берётся из настроек."""

    resolved = level if level is not None else get_settings().log_level
    logging.basicConfig(level=resolved, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    for name in ("domain", "infrastructure", "tools"):
        logging.getLogger(name).setLevel(resolved)


def get_logger(name: str) -> Logger:
    """Получить настроенный логгер по имени."""

    return logging.getLogger(name)
