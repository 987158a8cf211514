"""Доменные модели: типы параметров, аргументы совпадений и определения шагов."""
from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Sequence

from .enums import MatchStatus, StepKeyword, StepPatternType, TransformerKind
from .errors import (
    AmbiguousTransformerError,
    AnonymousMultipleCaptureGroupsError,
    IllegalParameterTypeNameError,
    TransformFailureError,
)

_LEGAL_NAME_CHARACTER_RE = re.compile(r"[A-Za-z0-9_-]")


@dataclass(frozen=True)
class Transformer:
    """Функция преобразования значения параметра вместе с видом её входа.

    ``STRING`` получает одну строку, ``CAPTURE_GROUP`` получает список
    значений всех собственных групп захвата параметра.
    """

    kind: TransformerKind
    function: Callable[..., Any]


def string_transformer(function: Callable[[str], Any]) -> Transformer:
    return Transformer(TransformerKind.STRING, function)


def capture_group_transformer(function: Callable[[list[str | None]], Any]) -> Transformer:
    return Transformer(TransformerKind.CAPTURE_GROUP, function)


@dataclass(frozen=True)
class ParameterType:
    """Именованный или анонимный тип параметра выражения."""

    name: str | None
    patterns: tuple[str, ...]
    target_type: Any
    transformer: Transformer
    use_for_snippets: bool = True
    prefer_for_regexp_match: bool = False
    group_count: int = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.name is not None:
            for character in self.name:
                if not _LEGAL_NAME_CHARACTER_RE.fullmatch(character):
                    raise IllegalParameterTypeNameError(self.name, character)

        patterns = (self.patterns,) if isinstance(self.patterns, str) else tuple(self.patterns)
        if not patterns:
            raise ValueError(f"ParameterType {{{self.name}}} must declare at least one pattern")
        object.__setattr__(self, "patterns", patterns)
        # Альтернативы объединяются через "|", поэтому значима наибольшая из них
        object.__setattr__(self, "group_count", max(re.compile(pattern).groups for pattern in patterns))

        if not isinstance(self.transformer, Transformer):
            if not callable(self.transformer):
                raise TypeError(f"Transformer of ParameterType {{{self.name}}} is not callable")
            object.__setattr__(self, "transformer", string_transformer(self.transformer))

    @property
    def anonymous(self) -> bool:
        return self.name is None

    def as_anonymous(self, pattern: str) -> "ParameterType":
        """Возвращает анонимную копию типа, привязанную к одной группе регулярки."""

        return replace(self, name=None, patterns=(pattern,))

    def transform(self, captured_values: Sequence[str | None]) -> Any:
        """Преобразует захваченные значения с помощью трансформера типа.

        Ошибки пользовательской функции оборачиваются в ``TransformFailureError``;
        ошибки конфигурации (несколько групп при строковом трансформере)
        выбрасываются как есть.
        """

        values = list(captured_values)
        if self.transformer.kind is TransformerKind.STRING:
            if self.group_count > 1:
                if self.anonymous:
                    raise AnonymousMultipleCaptureGroupsError(self.patterns)
                raise AmbiguousTransformerError(self.name, self.patterns)
            # Каждая альтернатива даёт не больше одной группы, участвует только одна
            value = next((value for value in values if value is not None), None)
            if value is None:
                return None
            arguments: tuple[Any, ...] = (value,)
        else:
            arguments = (values,)

        try:
            return self.transformer.function(*arguments)
        except Exception as error:
            raise TransformFailureError(self.name, values, self.target_type, error) from error


@dataclass(frozen=True)
class GroupLayoutEntry:
    """Положение одного вхождения параметра в плоском массиве групп совпадения.

    ``group_index`` указывает на оборачивающую группу вхождения, а
    ``own_group_count`` — на количество вложенных в неё групп, которые
    объявлены собственным паттерном параметра.
    """

    parameter_type: ParameterType
    group_index: int
    own_group_count: int

    def slice_values(self, match: re.Match[str]) -> tuple[str | None, ...]:
        if self.own_group_count == 0:
            return (match.group(self.group_index),)
        first = self.group_index + 1
        return tuple(match.group(index) for index in range(first, first + self.own_group_count))


@dataclass(frozen=True)
class Group:
    """Сырой фрагмент текста, захваченный вхождением параметра."""

    value: str | None
    start: int
    end: int


@dataclass(frozen=True)
class Argument:
    """Аргумент одного совпадения. Значение вычисляется только по запросу."""

    parameter_type: ParameterType
    captured_values: tuple[str | None, ...]
    group: Group

    @classmethod
    def build(cls, match: re.Match[str], layout: Iterable[GroupLayoutEntry]) -> list["Argument"]:
        """Нарезает группы совпадения по таблице раскладки, слева направо."""

        arguments: list[Argument] = []
        for entry in layout:
            index = entry.group_index
            arguments.append(
                cls(
                    parameter_type=entry.parameter_type,
                    captured_values=entry.slice_values(match),
                    group=Group(match.group(index), match.start(index), match.end(index)),
                )
            )
        return arguments

    @property
    def value(self) -> Any:
        return self.parameter_type.transform(self.captured_values)

    def get_value(self) -> Any:
        return self.value


@dataclass
class StepDefinition:
    """Описание шага тестового фреймворка (Cucumber/BDD)."""

    id: str
    keyword: StepKeyword
    pattern: str
    code_ref: str
    pattern_type: StepPatternType | None = None

    def __post_init__(self) -> None:
        if isinstance(self.keyword, str) and not isinstance(self.keyword, StepKeyword):
            self.keyword = StepKeyword.from_string(self.keyword)
        if isinstance(self.pattern_type, str):
            self.pattern_type = StepPatternType(self.pattern_type)


@dataclass
class TestStep:
    """Строка шага сценария, которую нужно привязать к определению."""

    __test__ = False

    order: int
    text: str


@dataclass
class MatchedStep:
    """Результат сопоставления строки шага с определениями шагов."""

    test_step: TestStep
    status: MatchStatus
    step_definition: StepDefinition | None = None
    arguments: list[Argument] = field(default_factory=list)
    candidates: list[StepDefinition] = field(default_factory=list)
