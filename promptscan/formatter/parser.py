"""Parser for module format strings.

Grammar::

    format      := element*
    element     := text | variable | textgroup | conditional
    variable    := '$' name | '${' name '}'
    textgroup   := '[' format ']' '(' style ')'
    conditional := '(' format ')'

``\\`` escapes any of ``[ ] ( ) $ \\`` inside text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..exceptions import FormatSyntaxError

SPECIAL_CHARS = '[]()$\\'

_NAME_RE = re.compile(r'[A-Za-z0-9_]+')


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Variable:
    name: str


@dataclass(frozen=True)
class TextGroup:
    children: Tuple['Element', ...]
    style: str


@dataclass(frozen=True)
class Conditional:
    children: Tuple['Element', ...]


Element = Union[Text, Variable, TextGroup, Conditional]


class _Parser:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def error(self, reason: str, position: int = None) -> FormatSyntaxError:
        return FormatSyntaxError(reason, self.source, self.pos if position is None else position)

    def peek(self) -> str:
        return self.source[self.pos] if self.pos < len(self.source) else ''

    def parse(self) -> Tuple[Element, ...]:
        elements = self.parse_elements(closing='')
        if self.pos < len(self.source):
            raise self.error(f'unexpected {self.peek()!r}')
        return elements

    def parse_elements(self, closing: str) -> Tuple[Element, ...]:
        elements: List[Element] = []
        buf: List[str] = []

        def flush():
            if buf:
                elements.append(Text(''.join(buf)))
                buf.clear()

        while self.pos < len(self.source):
            ch = self.peek()
            if ch == '\\':
                if self.pos + 1 >= len(self.source):
                    raise self.error('dangling escape')
                buf.append(self.source[self.pos + 1])
                self.pos += 2
            elif ch == '$':
                flush()
                elements.append(self.parse_variable())
            elif ch == '[':
                flush()
                elements.append(self.parse_textgroup())
            elif ch == '(':
                flush()
                elements.append(self.parse_conditional())
            elif ch in '])':
                if ch == closing:
                    break
                raise self.error(f'unmatched {ch!r}')
            else:
                buf.append(ch)
                self.pos += 1
        flush()
        return tuple(elements)

    def parse_variable(self) -> Variable:
        start = self.pos
        self.pos += 1
        braced = self.peek() == '{'
        if braced:
            self.pos += 1
        m = _NAME_RE.match(self.source, self.pos)
        if not m:
            raise self.error('expected variable name after "$"', start)
        self.pos = m.end()
        if braced:
            if self.peek() != '}':
                raise self.error('unclosed "${"', start)
            self.pos += 1
        return Variable(m.group(0))

    def parse_textgroup(self) -> TextGroup:
        start = self.pos
        self.pos += 1
        children = self.parse_elements(closing=']')
        if self.peek() != ']':
            raise self.error('unclosed "["', start)
        self.pos += 1
        if self.peek() != '(':
            raise self.error('text group must be followed by "(style)"')
        style_start = self.pos + 1
        style_end = self.source.find(')', style_start)
        if style_end < 0:
            raise self.error('unclosed style', self.pos)
        self.pos = style_end + 1
        return TextGroup(children, self.source[style_start:style_end].strip())

    def parse_conditional(self) -> Conditional:
        start = self.pos
        self.pos += 1
        children = self.parse_elements(closing=')')
        if self.peek() != ')':
            raise self.error('unclosed "("', start)
        self.pos += 1
        return Conditional(children)


def parse_format(source: str) -> Tuple[Element, ...]:
    """Parse ``source`` into an element tree. Raises FormatSyntaxError."""
    if source is None:
        raise FormatSyntaxError('format string is missing')
    return _Parser(source).parse()


def iter_variables(elements) -> List[str]:
    names: List[str] = []
    for element in elements:
        if isinstance(element, Variable):
            names.append(element.name)
        elif isinstance(element, (TextGroup, Conditional)):
            names.extend(iter_variables(element.children))
    return names
