"""Format string engine for prompt modules.

- parser.py: format string grammar
- string_formatter.py: compiled formatter rendering to segments
- style.py: style strings to ANSI
"""

from .segment import Segment
from .string_formatter import StringFormatter
from .style import Style, parse_style

__all__ = ['Segment', 'StringFormatter', 'Style', 'parse_style']
