"""Проверки пользовательских типов параметров в Cucumber Expression."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from domain.errors import (
    AmbiguousTransformerError,
    DuplicateTypeNameError,
    IllegalParameterTypeNameError,
    TransformFailureError,
)
from domain.models import ParameterType, capture_group_transformer, string_transformer
from infrastructure.parameter_type_registry import ParameterTypeRegistry
from tools.cucumber_expression import CucumberExpression


@dataclass(frozen=True)
class Color:
    name: str


@dataclass(frozen=True)
class CssColor:
    name: str


@dataclass(frozen=True)
class Coordinate:
    x: int
    y: int
    z: int


COORDINATE_PATTERN = r"(\d+),\s*(\d+),\s*(\d+)"


def _registry_with_color() -> ParameterTypeRegistry:
    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(
        ParameterType("color", "red|blue|yellow", Color, string_transformer(Color), False, False)
    )
    return registry


def _to_coordinate(values: list[str | None]) -> Coordinate:
    x, y, z = values
    return Coordinate(int(x), int(y), int(z))


def test_illegal_character_in_parameter_name() -> None:
    with pytest.raises(IllegalParameterTypeNameError) as excinfo:
        ParameterType("[string]", ".*", str, string_transformer(str), False, False)

    assert str(excinfo.value) == "Illegal character '[' in parameter name {[string]}."
    assert excinfo.value.character == "["


def test_matches_parameters_with_custom_parameter_type() -> None:
    expression = CucumberExpression("I have a {color} ball", _registry_with_color())

    arguments = expression.match("I have a red ball")

    assert arguments is not None
    assert len(arguments) == 1
    assert arguments[0].value == Color("red")


def test_matches_parameters_with_multiple_capture_groups() -> None:
    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(
        ParameterType(
            "coordinate", COORDINATE_PATTERN, Coordinate, capture_group_transformer(_to_coordinate), False, False
        )
    )
    expression = CucumberExpression("A {int} thick line from {coordinate} to {coordinate}", registry)

    arguments = expression.match("A 5 thick line from 10,20,30 to 40,50,60")

    assert arguments is not None
    assert [argument.value for argument in arguments] == [5, Coordinate(10, 20, 30), Coordinate(40, 50, 60)]
    assert arguments[1].captured_values == ("10", "20", "30")
    assert arguments[2].group.value == "40,50,60"


def test_plain_transformer_with_multiple_capture_groups_fails_lazily() -> None:
    def never_called(value: str) -> Coordinate:
        raise AssertionError("transformer must not be invoked")

    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(
        ParameterType("coordinate", COORDINATE_PATTERN, Coordinate, string_transformer(never_called), False, False)
    )
    expression = CucumberExpression("A {int} thick line from {coordinate} to {coordinate}", registry)
    arguments = expression.match("A 5 thick line from 10,20,30 to 40,50,60")
    assert arguments is not None

    thickness = arguments[0].value

    with pytest.raises(AmbiguousTransformerError) as excinfo:
        arguments[1].get_value()

    assert str(excinfo.value) == (
        r"ParameterType {coordinate} was registered with a Transformer but has multiple capture groups "
        r"[(\d+),\s*(\d+),\s*(\d+)]. Did you mean to use a CaptureGroupTransformer?"
    )
    assert thickness == 5
    assert arguments[0].value == 5


def test_multiple_pattern_alternatives() -> None:
    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(
        ParameterType(
            "color",
            ["red|blue|yellow", "(?:dark|light) (?:red|blue|yellow)"],
            Color,
            string_transformer(Color),
            False,
            False,
        )
    )
    expression = CucumberExpression("I have a {color} ball", registry)

    assert expression.match("I have a dark red ball")[0].value == Color("dark red")
    assert expression.match("I have a blue ball")[0].value == Color("blue")


def test_alternatives_with_one_capture_group_each_use_plain_transformer() -> None:
    registry = ParameterTypeRegistry("en")
    size = ParameterType("size", [r"(\d+)px", r"(\d+)em"], int, string_transformer(int), False, False)
    registry.define_parameter_type(size)
    expression = CucumberExpression("width {size}", registry)

    in_em = expression.match("width 5em")[0]
    in_px = expression.match("width 12px")[0]

    assert size.group_count == 1
    assert in_em.captured_values == (None, "5")
    assert in_em.value == 5
    assert in_px.captured_values == ("12", None)
    assert in_px.value == 12


def test_defers_transformation_until_queried() -> None:
    def explode(value: str) -> CssColor:
        raise RuntimeError(f"Can't transform [{value}]")

    registry = _registry_with_color()
    registry.define_parameter_type(
        ParameterType("throwing", "bad", CssColor, string_transformer(explode), False, False)
    )
    expression = CucumberExpression("I have a {throwing} parameter", registry)

    arguments = expression.match("I have a bad parameter")
    assert arguments is not None

    with pytest.raises(TransformFailureError) as excinfo:
        arguments[0].value

    message = str(excinfo.value)
    assert message.startswith("ParameterType {throwing} failed to transform [bad] to ")
    assert message.endswith("CssColor")
    assert excinfo.value.name == "throwing"
    assert excinfo.value.raw_values == ("bad",)
    assert excinfo.value.target_type is CssColor
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_failing_argument_does_not_affect_siblings() -> None:
    def strict(value: str) -> int:
        if value == "bad":
            raise ValueError("bad value")
        return len(value)

    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(ParameterType("strict", r"\w+", int, string_transformer(strict), False, False))
    expression = CucumberExpression("{strict} and {strict}", registry)
    arguments = expression.match("bad and good")
    assert arguments is not None

    with pytest.raises(TransformFailureError):
        arguments[0].value

    assert arguments[1].value == 4
    with pytest.raises(TransformFailureError):
        arguments[0].value


def test_conflicting_parameter_type_is_detected_for_type_name() -> None:
    registry = _registry_with_color()

    with pytest.raises(DuplicateTypeNameError) as excinfo:
        registry.define_parameter_type(
            ParameterType("color", ".*", CssColor, string_transformer(CssColor), False, False)
        )

    assert str(excinfo.value) == "There is already a parameter type with name color"


def test_conflicting_parameter_type_is_not_detected_for_type() -> None:
    registry = _registry_with_color()

    registry.define_parameter_type(
        ParameterType("whatever", ".*", Color, string_transformer(Color), False, False)
    )

    assert [parameter_type.name for parameter_type in registry.lookup_by_target_type(Color)] == [
        "color",
        "whatever",
    ]


def test_conflicting_parameter_type_is_not_detected_for_regexp() -> None:
    registry = _registry_with_color()
    registry.define_parameter_type(
        ParameterType("css-color", "red|blue|yellow", CssColor, string_transformer(CssColor), False, False)
    )

    css = CucumberExpression("I have a {css-color} ball", registry).match("I have a blue ball")
    plain = CucumberExpression("I have a {color} ball", registry).match("I have a blue ball")

    assert css[0].value == CssColor("blue")
    assert plain[0].value == Color("blue")


def test_optional_capture_group_values_are_absent() -> None:
    registry = ParameterTypeRegistry("en")
    registry.define_parameter_type(
        ParameterType("point", r"(\d+)(?:,(\d+))?", tuple, capture_group_transformer(tuple), False, False)
    )
    expression = CucumberExpression("at {point}", registry)

    assert expression.match("at 5")[0].value == ("5", None)
    assert expression.match("at 5,6")[0].value == ("5", "6")
