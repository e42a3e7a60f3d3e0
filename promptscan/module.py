"""Rendered output of a prompt module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping

from .formatter.segment import Segment

__all__ = ['Module', 'Segment']


@dataclass
class Module:
    """Module descriptor: name, prefix, suffix and the ordered segments."""

    name: str
    description: str = ''
    config: Mapping[str, Any] = field(default_factory=dict)
    prefix: Segment = field(default_factory=lambda: Segment(''))
    suffix: Segment = field(default_factory=lambda: Segment(''))
    segments: List[Segment] = field(default_factory=list)

    def set_segments(self, segments: Iterable[Segment]) -> None:
        self.segments = list(segments)

    def set_prefix(self, value: str) -> None:
        self.prefix = Segment(value, self.prefix.style)

    def set_suffix(self, value: str) -> None:
        self.suffix = Segment(value, self.suffix.style)

    def is_empty(self) -> bool:
        return all(not seg.value for seg in self.segments)

    def to_plain_string(self) -> str:
        parts = [self.prefix.value, *(seg.value for seg in self.segments), self.suffix.value]
        return ''.join(parts)

    def to_ansi_string(self) -> str:
        parts = [self.prefix.ansi_string(), *(seg.ansi_string() for seg in self.segments), self.suffix.ansi_string()]
        return ''.join(parts)

    def __str__(self) -> str:
        return self.to_ansi_string()

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'prefix': self.prefix.value,
            'suffix': self.suffix.value,
            'segments': [
                {'value': seg.value, 'style': str(seg.style) if seg.style else None}
                for seg in self.segments
            ],
        }
