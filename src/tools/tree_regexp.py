"""Дерево групп захвата регулярного выражения.

Нумерация групп совпадает с нумерацией ``re``: по порядку открывающих скобок.
Группы без захвата (``(?:``, просмотры, флаги) в дерево не попадают, их
вложенные группы поднимаются к ближайшему захватывающему предку.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass
class GroupBuilder:
    """Захватывающая группа: номер, текст тела и вложенные захватывающие группы."""

    index: int
    capturing: bool = True
    body_start: int = 0
    source: str = ""
    children: list["GroupBuilder"] = field(default_factory=list)

    def descendant_count(self) -> int:
        return sum(1 + child.descendant_count() for child in self.children)


def _group_prefix(pattern: str, position: int) -> tuple[bool, int]:
    """Определяет, захватывает ли группа с ``(`` в ``position``, и где начинается её тело."""

    if not pattern.startswith("?", position + 1):
        return True, position + 1
    if pattern.startswith("?P<", position + 1):
        closing = pattern.index(">", position)
        return True, closing + 1
    return False, position + 1


class TreeRegexp:
    def __init__(self, regexp: str | re.Pattern[str]) -> None:
        self.regexp = regexp if isinstance(regexp, re.Pattern) else re.compile(regexp)
        self.root = self._build(self.regexp.pattern)

    @property
    def group_builders(self) -> list[GroupBuilder]:
        """Группы захвата верхнего уровня, слева направо."""

        return list(self.root.children)

    @staticmethod
    def _build(pattern: str) -> GroupBuilder:
        root = GroupBuilder(index=0, source=pattern)
        stack = [root]
        next_index = 1
        escaping = False
        in_class = False
        position = 0

        while position < len(pattern):
            character = pattern[position]
            if escaping:
                escaping = False
            elif character == "\\":
                escaping = True
            elif in_class:
                if character == "]":
                    in_class = False
            elif character == "[":
                in_class = True
                # ']' сразу после '[' или '[^' — обычный символ класса
                lookahead = position + 1
                if pattern.startswith("^", lookahead):
                    lookahead += 1
                if pattern.startswith("]", lookahead):
                    position = lookahead
            elif character == "(":
                if pattern.startswith("?#", position + 1):
                    position = pattern.index(")", position)
                else:
                    capturing, body_start = _group_prefix(pattern, position)
                    index = next_index if capturing else -1
                    if capturing:
                        next_index += 1
                    stack.append(GroupBuilder(index=index, capturing=capturing, body_start=body_start))
            elif character == ")":
                builder = stack.pop()
                builder.source = pattern[builder.body_start:position]
                parent = stack[-1]
                if builder.capturing:
                    parent.children.append(builder)
                else:
                    parent.children.extend(builder.children)
            position += 1

        return root
