"""Shared exceptions raised while defining, compiling and transforming expressions."""
from __future__ import annotations

from typing import Any, Sequence


def describe_type(target_type: Any) -> str:
    """Human readable name of a parameter target type."""

    if isinstance(target_type, type):
        if target_type.__module__ == "builtins":
            return target_type.__qualname__
        return f"{target_type.__module__}.{target_type.__qualname__}"
    return str(target_type)


def format_patterns(patterns: Sequence[str]) -> str:
    return "[" + ", ".join(patterns) + "]"


class CucumberExpressionError(Exception):
    """Base class for every error raised by the expression library."""


class IllegalParameterTypeNameError(CucumberExpressionError):
    """Raised when a parameter type name contains a forbidden character."""

    def __init__(self, name: str, character: str) -> None:
        super().__init__(f"Illegal character '{character}' in parameter name {{{name}}}.")
        self.name = name
        self.character = character


class DuplicateTypeNameError(CucumberExpressionError):
    """Raised when a second parameter type is registered under an existing name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"There is already a parameter type with name {name}")
        self.name = name


class UndefinedParameterTypeError(CucumberExpressionError):
    """Raised when an expression references a parameter type nobody registered."""

    def __init__(self, name: str, expression: str | None = None) -> None:
        message = f"Undefined parameter type {{{name}}}"
        if expression is not None:
            message += f" in expression {expression!r}"
        super().__init__(message + ".")
        self.name = name
        self.expression = expression


class CucumberExpressionGrammarError(CucumberExpressionError):
    """Raised when expression text cannot be parsed."""

    def __init__(self, expression: str, column: int, problem: str) -> None:
        super().__init__(
            f"This Cucumber Expression has a problem at column {column + 1}: {problem}\n"
            f"{expression}\n{' ' * column}^"
        )
        self.expression = expression
        self.column = column
        self.problem = problem


class AmbiguousTransformerError(CucumberExpressionError):
    """A plain transformer was attached to a pattern with several capture groups."""

    def __init__(self, name: str | None, patterns: Sequence[str]) -> None:
        super().__init__(
            f"ParameterType {{{name}}} was registered with a Transformer but has multiple "
            f"capture groups {format_patterns(patterns)}. Did you mean to use a CaptureGroupTransformer?"
        )
        self.name = name
        self.patterns = tuple(patterns)


class AnonymousMultipleCaptureGroupsError(CucumberExpressionError):
    """An anonymous parameter type received more than one capture group."""

    def __init__(self, patterns: Sequence[str]) -> None:
        super().__init__(
            f"Anonymous ParameterType has multiple capture groups {format_patterns(patterns)}. "
            "You can only use a single capture group in an anonymous ParameterType."
        )
        self.patterns = tuple(patterns)


class TransformFailureError(CucumberExpressionError):
    """Wraps an exception raised by a user supplied transformer."""

    def __init__(
        self,
        name: str | None,
        raw_values: Sequence[str | None],
        target_type: Any,
        cause: BaseException,
    ) -> None:
        rendered = "[" + ", ".join(str(value) for value in raw_values) + "]"
        super().__init__(
            f"ParameterType {{{name or ''}}} failed to transform {rendered} to {describe_type(target_type)}"
        )
        self.name = name
        self.raw_values = tuple(raw_values)
        self.target_type = target_type
        self.cause = cause
