from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .parser import Conditional, Element, Text, TextGroup, Variable, iter_variables, parse_format
from .segment import Segment
from .style import Style, parse_style

Resolver = Callable[[str], Optional[str]]


class StringFormatter:
    """Compiled format string.

    Usage:
        formatter = StringFormatter("via [R $version](blue bold) ")
        segments = formatter.parse(lambda name: "v3.6.3" if name == "version" else None)

    Compiling raises FormatSyntaxError. A compiled formatter holds no render
    state, so ``parse`` can be called any number of times.
    """

    def __init__(self, format_string: str):
        self.format_string = format_string
        self.elements: Tuple[Element, ...] = parse_format(format_string)

    @property
    def variables(self) -> List[str]:
        return iter_variables(self.elements)

    def parse(self, resolve: Resolver, default_style: Optional[Style] = None) -> List[Segment]:
        segments, _ = self._render(self.elements, resolve, default_style)
        return segments

    def _render(self, elements, resolve: Resolver, style: Optional[Style]) -> Tuple[List[Segment], bool]:
        """Render ``elements``; the flag says whether any variable had a value."""
        segments: List[Segment] = []
        has_value = False
        for element in elements:
            if isinstance(element, Text):
                segments.append(Segment(element.value, style))
            elif isinstance(element, Variable):
                value = resolve(element.name)
                if value is None:
                    continue
                if value:
                    has_value = True
                segments.append(Segment(value, style, element.name))
            elif isinstance(element, TextGroup):
                group_style = parse_style(element.style) if element.style else style
                inner, inner_has_value = self._render(element.children, resolve, group_style)
                segments.extend(inner)
                has_value = has_value or inner_has_value
            elif isinstance(element, Conditional):
                inner, inner_has_value = self._render(element.children, resolve, style)
                if inner_has_value:
                    segments.extend(inner)
                    has_value = True
        return [seg for seg in segments if seg.value], has_value

    def __repr__(self) -> str:
        return f'StringFormatter({self.format_string!r})'
