"""Выражение на основе регулярки, переданной вызывающим кодом."""
from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from domain.models import Argument, GroupLayoutEntry, ParameterType, string_transformer
from infrastructure.parameter_type_registry import ParameterTypeRegistry
from tools.tree_regexp import GroupBuilder, TreeRegexp


logger = logging.getLogger(__name__)


class RegularExpression:
    """Регулярное выражение, группы верхнего уровня которого становятся аргументами.

    Тип каждой группы либо выводится по тексту её паттерна среди
    зарегистрированных типов, либо задаётся явно целевым типом. Явно
    заданный тип превращается в анонимный, поэтому строковый трансформер
    при нескольких группах внутри даст ошибку, но только при запросе значения.
    """

    def __init__(
        self,
        pattern: str | re.Pattern[str],
        parameter_type_registry: ParameterTypeRegistry,
        explicit_types: Sequence[Any] | None = None,
    ) -> None:
        self._tree = TreeRegexp(pattern)
        self._regexp = self._tree.regexp
        self._registry = parameter_type_registry
        self._explicit_types = tuple(explicit_types or ())
        self._group_layout = self._build_layout(self._explicit_types)

        parameter_type_registry.freeze()
        logger.debug(
            "Prepared regular expression %r with %d argument groups",
            self._regexp.pattern,
            len(self._group_layout),
        )

    @property
    def source(self) -> str:
        return self._regexp.pattern

    @property
    def regexp(self) -> re.Pattern[str]:
        return self._regexp

    @property
    def group_layout(self) -> tuple[GroupLayoutEntry, ...]:
        return self._group_layout

    def match(self, text: str, *types: Any) -> list[Argument] | None:
        """Ищет совпадение в тексте; ``types`` переопределяют явные типы групп на этот вызов."""

        match = self._regexp.search(text)
        if match is None:
            return None
        layout = self._build_layout(types) if types else self._group_layout
        return Argument.build(match, layout)

    def _build_layout(self, types: Sequence[Any]) -> tuple[GroupLayoutEntry, ...]:
        entries: list[GroupLayoutEntry] = []
        for position, group in enumerate(self._tree.group_builders):
            if position < len(types):
                parameter_type = self._explicit_parameter_type(types[position], group)
            else:
                parameter_type = self._inferred_parameter_type(group)
            entries.append(GroupLayoutEntry(parameter_type, group.index, group.descendant_count()))
        return tuple(entries)

    def _explicit_parameter_type(self, target_type: Any, group: GroupBuilder) -> ParameterType:
        parameter_type = self._registry.resolve_target_type(target_type)
        if parameter_type is None:
            return ParameterType(None, group.source, target_type, string_transformer(target_type), False, False)
        return parameter_type.as_anonymous(group.source)

    def _inferred_parameter_type(self, group: GroupBuilder) -> ParameterType:
        parameter_type = self._registry.lookup_by_regexp(group.source)
        if parameter_type is None:
            return ParameterType(None, group.source, str, string_transformer(str), False, False)
        return parameter_type

    def __repr__(self) -> str:
        return f"RegularExpression({self._regexp.pattern!r})"
