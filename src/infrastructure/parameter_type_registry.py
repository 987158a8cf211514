"""Реестр типов параметров.

Реестр наполняется один раз на этапе настройки, после чего используется
только на чтение: первое скомпилированное выражение «замораживает» его.
Типы с одинаковыми паттернами или одинаковым целевым типом допустимы,
уникальным должно быть только имя.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from app.config import get_settings
from domain.enums import RegistryState
from domain.errors import DuplicateTypeNameError, UndefinedParameterTypeError
from domain.models import ParameterType
from infrastructure.builtin_parameter_types import builtin_parameter_types


logger = logging.getLogger(__name__)


def _preferred(candidates: list[ParameterType]) -> ParameterType | None:
    for candidate in reversed(candidates):
        if candidate.prefer_for_regexp_match:
            return candidate
    return candidates[0] if candidates else None


class ParameterTypeRegistry:
    """Хранит зарегистрированные типы параметров и разрешает их по имени, типу и паттерну."""

    def __init__(self, locale: str | None = None) -> None:
        self.locale = locale or get_settings().locale
        self._state = RegistryState.BUILDING
        self._by_name: dict[str, ParameterType] = {}
        self._by_target_type: dict[Any, list[ParameterType]] = {}
        self._by_regexp: dict[str, list[ParameterType]] = {}
        self._ordered: list[ParameterType] = []

        for parameter_type in builtin_parameter_types(self.locale):
            self.define_parameter_type(parameter_type)

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def frozen(self) -> bool:
        return self._state is RegistryState.FROZEN

    @property
    def parameter_types(self) -> Iterator[ParameterType]:
        return iter(list(self._ordered))

    def define_parameter_type(self, parameter_type: ParameterType) -> None:
        """Регистрирует тип. Единственная проверка конфликтов — уникальность имени."""

        if parameter_type.name is not None and parameter_type.name in self._by_name:
            raise DuplicateTypeNameError(parameter_type.name)

        if self.frozen:
            logger.warning(
                "Parameter type {%s} defined after the registry was frozen; "
                "already compiled expressions will not see it",
                parameter_type.name,
            )

        if parameter_type.name is not None:
            self._by_name[parameter_type.name] = parameter_type
        self._by_target_type.setdefault(parameter_type.target_type, []).append(parameter_type)
        for pattern in parameter_type.patterns:
            self._by_regexp.setdefault(pattern, []).append(parameter_type)
        self._ordered.append(parameter_type)
        logger.debug(
            "Defined parameter type {%s} for %s with patterns %s",
            parameter_type.name,
            parameter_type.target_type,
            list(parameter_type.patterns),
        )

    def lookup_by_name(self, name: str) -> ParameterType:
        try:
            return self._by_name[name]
        except KeyError as error:
            raise UndefinedParameterTypeError(name) from error

    def lookup_by_target_type(self, target_type: Any) -> list[ParameterType]:
        """Возвращает все типы для целевого типа в порядке регистрации (возможно, пустой список)."""

        return list(self._by_target_type.get(target_type, []))

    def resolve_target_type(self, target_type: Any) -> ParameterType | None:
        """Выбирает тип для целевого типа: последний с ``prefer_for_regexp_match``, иначе первый."""

        return _preferred(self._by_target_type.get(target_type, []))

    def lookup_by_regexp(self, pattern: str) -> ParameterType | None:
        """Ищет тип, среди паттернов которого есть ровно такой текст регулярки."""

        return _preferred(self._by_regexp.get(pattern, []))

    def freeze(self) -> None:
        if self._state is RegistryState.BUILDING:
            self._state = RegistryState.FROZEN
            logger.debug("Parameter type registry frozen with %d types", len(self._ordered))
