"""Разбор текста Cucumber Expression в синтаксическое дерево.

Грамматика (слева направо):

* ``\\`` перед одним из ``{ } ( ) / \\`` даёт сам символ, в остальных случаях это ошибка;
* ``{name}`` — параметр, имя может содержать любые символы, кроме фигурных скобок;
* ``(text)`` — необязательный текст, внутри допустимы только литералы и альтернативы;
* ``/`` внутри непрерывного литерального текста разделяет альтернативы.

Первая альтернатива начинается после последнего пробела перед первым ``/``
(или с начала литерального фрагмента), последняя тянется до конца фрагмента,
то есть до параметра, необязательного текста или конца выражения.
Альтернативы состоят только из текста: ``(a)/b`` и ``a/(b)`` — ошибки грамматики,
необязательный текст не может быть частью альтернативы.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from domain.errors import CucumberExpressionGrammarError


ESCAPABLE_CHARACTERS = frozenset("{}()/\\")


class TokenType(str, Enum):
    TEXT = "text"
    WHITESPACE = "whitespace"
    BEGIN_PARAMETER = "beginParameter"
    END_PARAMETER = "endParameter"
    BEGIN_OPTIONAL = "beginOptional"
    END_OPTIONAL = "endOptional"
    ALTERNATION = "alternation"


_SPECIAL_TOKENS: dict[str, TokenType] = {
    "{": TokenType.BEGIN_PARAMETER,
    "}": TokenType.END_PARAMETER,
    "(": TokenType.BEGIN_OPTIONAL,
    ")": TokenType.END_OPTIONAL,
    "/": TokenType.ALTERNATION,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    column: int


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class ParameterNode:
    name: str
    column: int


@dataclass(frozen=True)
class AlternationNode:
    alternatives: tuple[str, ...]


@dataclass(frozen=True)
class OptionalNode:
    children: tuple[Union[TextNode, AlternationNode], ...]


Node = Union[TextNode, ParameterNode, AlternationNode, OptionalNode]


@dataclass(frozen=True)
class ExpressionNode:
    source: str
    children: tuple[Node, ...]


def tokenize(expression: str) -> list[Token]:
    """Разбивает выражение на посимвольные токены с учётом экранирования."""

    tokens: list[Token] = []
    escaping_column: int | None = None
    for column, character in enumerate(expression):
        if escaping_column is not None:
            if character not in ESCAPABLE_CHARACTERS:
                raise CucumberExpressionGrammarError(
                    expression,
                    escaping_column,
                    f"Only the characters '{{', '}}', '(', ')', '/' and '\\' can be escaped, got '{character}'",
                )
            tokens.append(Token(TokenType.TEXT, character, escaping_column))
            escaping_column = None
        elif character == "\\":
            escaping_column = column
        elif character in _SPECIAL_TOKENS:
            tokens.append(Token(_SPECIAL_TOKENS[character], character, column))
        elif character.isspace():
            tokens.append(Token(TokenType.WHITESPACE, character, column))
        else:
            tokens.append(Token(TokenType.TEXT, character, column))

    if escaping_column is not None:
        raise CucumberExpressionGrammarError(
            expression, escaping_column, "The end of the expression can not be escaped"
        )
    return tokens


class _Parser:
    def __init__(self, expression: str, tokens: list[Token]) -> None:
        self.expression = expression
        self.tokens = tokens
        self.position = 0

    def error(self, column: int, problem: str) -> CucumberExpressionGrammarError:
        return CucumberExpressionGrammarError(self.expression, column, problem)

    def parse(self) -> ExpressionNode:
        children = self._parse_sequence(inside_optional=False)
        return ExpressionNode(self.expression, tuple(children))

    def _parse_sequence(self, inside_optional: bool) -> list[Node]:
        nodes: list[Node] = []
        run: list[Token] = []

        while self.position < len(self.tokens):
            token = self.tokens[self.position]
            if token.type in (TokenType.TEXT, TokenType.WHITESPACE, TokenType.ALTERNATION):
                run.append(token)
                self.position += 1
                continue

            if token.type is TokenType.END_OPTIONAL:
                if inside_optional:
                    break
                raise self.error(token.column, "The ')' does not have a matching '('")
            if token.type is TokenType.END_PARAMETER:
                raise self.error(token.column, "The '}' does not have a matching '{'")

            nodes.extend(self._literal_nodes(run, nodes, token.type is TokenType.BEGIN_OPTIONAL))
            run = []
            if token.type is TokenType.BEGIN_PARAMETER:
                if inside_optional:
                    raise self.error(token.column, "An optional may not contain a parameter type")
                nodes.append(self._parse_parameter())
            else:
                if inside_optional:
                    raise self.error(token.column, "An optional may not contain an other optional")
                nodes.append(self._parse_optional())

        nodes.extend(self._literal_nodes(run, nodes, False))
        return nodes

    def _parse_parameter(self) -> ParameterNode:
        opening = self.tokens[self.position]
        self.position += 1
        name: list[str] = []
        while self.position < len(self.tokens):
            token = self.tokens[self.position]
            self.position += 1
            if token.type is TokenType.END_PARAMETER:
                return ParameterNode("".join(name), opening.column)
            if token.type is TokenType.BEGIN_PARAMETER:
                raise self.error(token.column, "Parameter types can not be nested")
            name.append(token.text)
        raise self.error(opening.column, "The '{' does not have a matching '}'")

    def _parse_optional(self) -> OptionalNode:
        opening = self.tokens[self.position]
        self.position += 1
        children = self._parse_sequence(inside_optional=True)
        if self.position >= len(self.tokens):
            raise self.error(opening.column, "The '(' does not have a matching ')'")
        self.position += 1
        if not children:
            raise self.error(opening.column, "An optional must contain some text")
        return OptionalNode(tuple(children))  # type: ignore[arg-type]

    def _literal_nodes(self, run: list[Token], preceding: list[Node], before_optional: bool) -> list[Node]:
        if not run:
            return []

        separators = [index for index, token in enumerate(run) if token.type is TokenType.ALTERNATION]
        if not separators:
            return [TextNode("".join(token.text for token in run))]

        start = 0
        for index in range(separators[0] - 1, -1, -1):
            if run[index].type is TokenType.WHITESPACE:
                start = index + 1
                break

        nodes: list[Node] = []
        if start:
            nodes.append(TextNode("".join(token.text for token in run[:start])))

        alternatives: list[str] = []
        current: list[str] = []
        boundary = run[start].column
        for token in run[start:]:
            if token.type is TokenType.ALTERNATION:
                if not current:
                    if not alternatives and start == 0 and preceding and isinstance(preceding[-1], OptionalNode):
                        raise self.error(boundary, "An alternation may not start right after an optional")
                    raise self.error(boundary, "Alternative may not be empty")
                alternatives.append("".join(current))
                current = []
                boundary = token.column
            else:
                current.append(token.text)
        if not current:
            if before_optional:
                raise self.error(boundary, "An alternation may not end right before an optional")
            raise self.error(boundary, "Alternative may not be empty")
        alternatives.append("".join(current))

        nodes.append(AlternationNode(tuple(alternatives)))
        return nodes


def parse(expression: str) -> ExpressionNode:
    """Строит синтаксическое дерево выражения или выбрасывает ``CucumberExpressionGrammarError``."""

    return _Parser(expression, tokenize(expression)).parse()
