"""Встроенные типы параметров, которыми заполняется каждый реестр."""
from __future__ import annotations

import re
from decimal import Decimal

from domain.models import ParameterType, capture_group_transformer, string_transformer


INTEGER_PATTERNS: tuple[str, ...] = (r"-?\d+", r"\d+")
WORD_PATTERN = r"[^\s]+"
STRING_PATTERNS: tuple[str, ...] = (
    r'"([^"\\]*(\\.[^"\\]*)*)"',
    r"'([^'\\]*(\\.[^'\\]*)*)'",
)
ANONYMOUS_PATTERN = r".*"

# Языки, в которых дробная часть отделяется запятой
_COMMA_DECIMAL_LANGUAGES = frozenset(
    {"bg", "cs", "da", "de", "es", "fi", "fr", "it", "nl", "nb", "pl", "pt", "ru", "sv", "tr", "uk"}
)


def decimal_separator(locale: str) -> str:
    """Возвращает разделитель дробной части для локали вида ``de``, ``de-DE`` или ``de_DE``."""

    language = re.split(r"[-_]", locale.strip(), maxsplit=1)[0].casefold()
    return "," if language in _COMMA_DECIMAL_LANGUAGES else "."


def _unquote(values: list[str | None]) -> str:
    """Берёт текст внешней группы кавычек: позиции 0 и 2, вложенные группы пропускаются."""

    quoted = next((values[index] for index in (0, 2) if index < len(values) and values[index] is not None), None)
    if quoted is None:
        raise ValueError("Quoted string was not captured")
    return quoted.replace('\\"', '"').replace("\\'", "'")


def builtin_parameter_types(locale: str) -> list[ParameterType]:
    """Собирает каталог встроенных типов для указанной локали."""

    separator = decimal_separator(locale)
    float_pattern = rf"[-+]?\d*{re.escape(separator)}?\d+(?:[eE][-+]?\d+)?"

    def to_float(text: str) -> float:
        return float(text.replace(separator, "."))

    def to_decimal(text: str) -> Decimal:
        return Decimal(text.replace(separator, "."))

    return [
        ParameterType("int", INTEGER_PATTERNS, int, string_transformer(int), True, True),
        ParameterType("float", float_pattern, float, string_transformer(to_float), True, False),
        ParameterType("word", WORD_PATTERN, str, string_transformer(str), False, False),
        ParameterType("string", STRING_PATTERNS, str, capture_group_transformer(_unquote), True, False),
        ParameterType("", ANONYMOUS_PATTERN, object, string_transformer(str), False, True),
        ParameterType("bigdecimal", float_pattern, Decimal, string_transformer(to_decimal), False, False),
        ParameterType("biginteger", INTEGER_PATTERNS, int, string_transformer(int), False, False),
        ParameterType("byte", INTEGER_PATTERNS, int, string_transformer(int), False, False),
        ParameterType("short", INTEGER_PATTERNS, int, string_transformer(int), False, False),
        ParameterType("long", INTEGER_PATTERNS, int, string_transformer(int), False, False),
        ParameterType("double", float_pattern, float, string_transformer(to_float), False, False),
    ]
