from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .style import Style


@dataclass(frozen=True)
class Segment:
    """One styled fragment of module output."""

    value: str
    style: Optional[Style] = None
    name: Optional[str] = None

    def ansi_string(self) -> str:
        if self.style is None or not self.value:
            return self.value
        return self.style.paint(self.value)
