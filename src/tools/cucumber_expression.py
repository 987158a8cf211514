"""Компиляция Cucumber Expression в якорную регулярку с таблицей групп."""
from __future__ import annotations

import logging
import re
from typing import Sequence

from domain.errors import UndefinedParameterTypeError
from domain.models import Argument, GroupLayoutEntry, ParameterType
from infrastructure.parameter_type_registry import ParameterTypeRegistry
from tools.cucumber_expression_parser import (
    AlternationNode,
    ExpressionNode,
    Node,
    OptionalNode,
    ParameterNode,
    TextNode,
    parse,
)


logger = logging.getLogger(__name__)


def _wrap_patterns(patterns: Sequence[str]) -> str:
    """Объединяет альтернативы паттерна типа в одну оборачивающую группу захвата."""

    if len(patterns) == 1:
        return f"({patterns[0]})"
    return "(" + "|".join(f"(?:{pattern})" for pattern in patterns) + ")"


class _Compiler:
    """Один проход по дереву: текст регулярки плюс раскладка групп параметров."""

    def __init__(self, registry: ParameterTypeRegistry, source: str) -> None:
        self.registry = registry
        self.source = source
        self.layout: list[GroupLayoutEntry] = []
        self.next_group_index = 1

    def compile(self, ast: ExpressionNode) -> str:
        body = "".join(self._emit(node) for node in ast.children)
        return f"^{body}$"

    def _emit(self, node: Node) -> str:
        if isinstance(node, TextNode):
            return re.escape(node.text)
        if isinstance(node, AlternationNode):
            return "(?:" + "|".join(re.escape(alternative) for alternative in node.alternatives) + ")"
        if isinstance(node, OptionalNode):
            return "(?:" + "".join(self._emit(child) for child in node.children) + ")?"
        if isinstance(node, ParameterNode):
            return self._emit_parameter(node)
        raise TypeError(f"Unsupported expression node: {node!r}")

    def _emit_parameter(self, node: ParameterNode) -> str:
        try:
            parameter_type = self.registry.lookup_by_name(node.name)
        except UndefinedParameterTypeError as error:
            raise UndefinedParameterTypeError(node.name, self.source) from error

        wrapped = _wrap_patterns(parameter_type.patterns)
        own_group_count = re.compile(wrapped).groups - 1
        self.layout.append(GroupLayoutEntry(parameter_type, self.next_group_index, own_group_count))
        self.next_group_index += 1 + own_group_count
        return wrapped


class CucumberExpression:
    """Выражение вида ``I have {int} cukes``, скомпилированное против реестра типов."""

    def __init__(self, expression: str, parameter_type_registry: ParameterTypeRegistry) -> None:
        self._source = expression
        self._registry = parameter_type_registry

        compiler = _Compiler(parameter_type_registry, expression)
        pattern = compiler.compile(parse(expression))
        self._regexp = re.compile(pattern)
        self._group_layout = tuple(compiler.layout)

        parameter_type_registry.freeze()
        logger.debug("Compiled cucumber expression %r to %r", expression, pattern)

    @property
    def source(self) -> str:
        return self._source

    @property
    def regexp(self) -> re.Pattern[str]:
        return self._regexp

    @property
    def group_layout(self) -> tuple[GroupLayoutEntry, ...]:
        return self._group_layout

    @property
    def parameter_types(self) -> list[ParameterType]:
        return [entry.parameter_type for entry in self._group_layout]

    def match(self, text: str) -> list[Argument] | None:
        """Сопоставляет текст целиком. Возвращает ``None``, если совпадения нет."""

        match = self._regexp.fullmatch(text)
        if match is None:
            return None
        return Argument.build(match, self._group_layout)

    def __repr__(self) -> str:
        return f"CucumberExpression({self._source!r})"


def cucumber_expression_to_regex(
    pattern: str, parameter_type_registry: ParameterTypeRegistry | None = None
) -> str:
    """Преобразует Cucumber Expression в текст регулярного выражения."""

    registry = parameter_type_registry or ParameterTypeRegistry()
    return CucumberExpression(pattern, registry).regexp.pattern
