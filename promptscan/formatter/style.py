"""Style strings such as ``"blue bold"`` or ``"fg:#ff8800 bg:238 underline"``.

Rendering is plain ANSI SGR; terminals that cannot show it are the host's
concern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

logger = logging.getLogger('promptscan.formatter')

Color = Union[int, Tuple[int, int, int]]

COLOR_NAMES = {
    'black': 0,
    'red': 1,
    'green': 2,
    'yellow': 3,
    'blue': 4,
    'purple': 5,
    'cyan': 6,
    'white': 7,
}

_HEX_RE = re.compile(r'^#([0-9a-f]{6})$')

RESET = '\x1b[0m'


@dataclass(frozen=True)
class Style:
    fg: Optional[Color] = None
    bg: Optional[Color] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    dimmed: bool = False
    inverted: bool = False

    def sgr_codes(self) -> list:
        codes = []
        if self.bold:
            codes.append('1')
        if self.dimmed:
            codes.append('2')
        if self.italic:
            codes.append('3')
        if self.underline:
            codes.append('4')
        if self.inverted:
            codes.append('7')
        if self.fg is not None:
            codes.append(_color_code(self.fg, 38))
        if self.bg is not None:
            codes.append(_color_code(self.bg, 48))
        return codes

    def paint(self, text: str) -> str:
        codes = self.sgr_codes()
        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}{RESET}"

    def __str__(self) -> str:
        parts = [name for name in ('bold', 'dimmed', 'italic', 'underline', 'inverted') if getattr(self, name)]
        if self.fg is not None:
            parts.append(f'fg:{_color_name(self.fg)}')
        if self.bg is not None:
            parts.append(f'bg:{_color_name(self.bg)}')
        return ' '.join(parts)


def _color_code(color: Color, base: int) -> str:
    if isinstance(color, tuple):
        r, g, b = color
        return f'{base};2;{r};{g};{b}'
    if color < 8:
        return str(base - 8 + color)
    if color < 16:
        return str(base + 52 + color - 8)
    return f'{base};5;{color}'


def _color_name(color: Color) -> str:
    if isinstance(color, tuple):
        return '#%02x%02x%02x' % color
    return str(color)


def parse_color(token: str) -> Optional[Color]:
    """Parse a single color token. Returns None if it is not a color."""
    token = token.lower()
    if token.startswith('bright-'):
        base = COLOR_NAMES.get(token[len('bright-'):])
        return None if base is None else base + 8
    if token in COLOR_NAMES:
        return COLOR_NAMES[token]
    m = _HEX_RE.match(token)
    if m:
        value = m.group(1)
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
    if token.isdigit():
        number = int(token)
        if 0 <= number <= 255:
            return number
    return None


def parse_style(style: Optional[str]) -> Optional[Style]:
    """Parse a style string.

    ``none`` or an empty string yield None. Any token that is neither a
    modifier nor a color invalidates the whole style (also None).
    """
    if not style:
        return None
    attrs = {}
    for token in style.split():
        lowered = token.lower()
        if lowered == 'none':
            return None
        if lowered in ('bold', 'italic', 'underline', 'dimmed', 'inverted'):
            attrs[lowered] = True
            continue
        target = 'fg'
        if lowered.startswith('fg:'):
            lowered = lowered[3:]
        elif lowered.startswith('bg:'):
            target = 'bg'
            lowered = lowered[3:]
        color = parse_color(lowered)
        if color is None:
            logger.debug('invalid style token %r in %r', token, style)
            return None
        attrs[target] = color
    return Style(**attrs)
