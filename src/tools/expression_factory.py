"""Выбор вида выражения по тексту определения шага."""
from __future__ import annotations

import re
from typing import Protocol

from domain.enums import StepPatternType
from domain.models import Argument
from infrastructure.parameter_type_registry import ParameterTypeRegistry
from tools.cucumber_expression import CucumberExpression
from tools.regular_expression import RegularExpression


class Expression(Protocol):
    """Общий контракт скомпилированных выражений."""

    @property
    def source(self) -> str: ...

    @property
    def regexp(self) -> re.Pattern[str]: ...

    def match(self, text: str) -> list[Argument] | None: ...


def expression_kind(source: str | re.Pattern[str]) -> StepPatternType:
    """Регулярка — это скомпилированный паттерн или строка, начинающаяся с ``^`` или оканчивающаяся ``$``."""

    if isinstance(source, re.Pattern) or source.startswith("^") or source.endswith("$"):
        return StepPatternType.REGULAR_EXPRESSION
    return StepPatternType.CUCUMBER_EXPRESSION


def create_expression(
    source: str | re.Pattern[str],
    parameter_type_registry: ParameterTypeRegistry,
    kind: StepPatternType | None = None,
) -> Expression:
    kind = kind or expression_kind(source)
    if kind is StepPatternType.REGULAR_EXPRESSION:
        return RegularExpression(source, parameter_type_registry)
    if isinstance(source, re.Pattern):
        raise TypeError("A compiled pattern can not be used as a cucumber expression")
    return CucumberExpression(source, parameter_type_registry)
