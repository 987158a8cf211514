"""Сопоставление строк шагов сценария с определениями шагов."""
from __future__ import annotations

import logging
from typing import Iterable

from domain.enums import MatchStatus
from domain.models import Argument, MatchedStep, StepDefinition, TestStep
from infrastructure.parameter_type_registry import ParameterTypeRegistry
from tools.expression_factory import Expression, create_expression


logger = logging.getLogger(__name__)


class StepMatcher:
    """Компилирует определения шагов один раз и привязывает к ним текст шагов.

    Значения аргументов здесь не вычисляются: вызывающий код сам решает,
    когда запрашивать ``Argument.value``.
    """

    def __init__(
        self,
        parameter_type_registry: ParameterTypeRegistry | None = None,
        step_definitions: Iterable[StepDefinition] | None = None,
    ) -> None:
        self.parameter_type_registry = parameter_type_registry or ParameterTypeRegistry()
        self._compiled: list[tuple[StepDefinition, Expression]] = []
        if step_definitions:
            self.add_definitions(step_definitions)

    @property
    def step_definitions(self) -> list[StepDefinition]:
        return [definition for definition, _ in self._compiled]

    def add_definitions(self, step_definitions: Iterable[StepDefinition]) -> None:
        """Компилирует определения; ошибка в любом из них прерывает добавление."""

        compiled = [
            (definition, create_expression(definition.pattern, self.parameter_type_registry, definition.pattern_type))
            for definition in step_definitions
        ]
        self._compiled.extend(compiled)
        logger.debug("Compiled %d step definitions", len(compiled))

    def match_step(self, test_step: TestStep) -> MatchedStep:
        """Находит определения, которым соответствует текст шага."""

        candidates: list[tuple[StepDefinition, list[Argument]]] = []
        for definition, expression in self._compiled:
            arguments = expression.match(test_step.text)
            if arguments is not None:
                candidates.append((definition, arguments))

        if not candidates:
            logger.debug("No step definition matches %r", test_step.text)
            return MatchedStep(test_step=test_step, status=MatchStatus.UNMATCHED)

        definition, arguments = candidates[0]
        if len(candidates) > 1:
            logger.debug(
                "Step %r matches %d definitions: %s",
                test_step.text,
                len(candidates),
                [candidate.code_ref for candidate, _ in candidates],
            )
            status = MatchStatus.AMBIGUOUS
        else:
            status = MatchStatus.EXACT
            logger.debug(
                "Step %r bound to %s %r (%s)",
                test_step.text,
                definition.keyword.value,
                definition.pattern,
                definition.code_ref,
            )

        return MatchedStep(
            test_step=test_step,
            status=status,
            step_definition=definition,
            arguments=arguments,
            candidates=[candidate for candidate, _ in candidates],
        )

    def match_steps(self, test_steps: Iterable[TestStep]) -> list[MatchedStep]:
        return [self.match_step(test_step) for test_step in test_steps]
