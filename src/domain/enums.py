"""Перечисления, описывающие основные типы доменной модели."""
from __future__ import annotations

from enum import Enum


class StepKeyword(str, Enum):
    """Ключевые слова Gherkin/Cucumber для шагов сценария."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"

    @classmethod
    def from_string(cls, keyword: str) -> "StepKeyword":
        """Преобразует строку с ключевым словом шага в каноническое перечисление.

        Регистр не имеет значения.
        """

        normalized = keyword.strip().casefold()
        if not normalized:
            raise ValueError("Keyword cannot be empty")

        for candidate in cls:
            if candidate.value.casefold() == normalized:
                return candidate
        raise ValueError(f"Unsupported step keyword: {keyword}")


class MatchStatus(str, Enum):
    """Статусы сопоставления текста шага с определениями шагов."""

    EXACT = "exact"
    AMBIGUOUS = "ambiguous"
    UNMATCHED = "unmatched"


class StepPatternType(str, Enum):
    """Тип паттерна шага (регулярка или выражение Cucumber)."""

    CUCUMBER_EXPRESSION = "cucumberExpression"
    REGULAR_EXPRESSION = "regularExpression"


class TransformerKind(str, Enum):
    """Вид трансформера параметра: одна строка или набор групп захвата."""

    STRING = "string"
    CAPTURE_GROUP = "captureGroup"


class RegistryState(str, Enum):
    """Жизненный цикл реестра типов параметров."""

    BUILDING = "building"
    FROZEN = "frozen"
