"""
Annotation codes: parsed code files and the label registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from turnscope.core.utils.config.base import USER_COLORS


@dataclass(frozen=True)
class ParsedCodes:
    """
    Result of parsing one annotation table.

    ``kind`` is ``turn`` (``turns`` maps code -> sorted turn numbers) or
    ``time`` (``intervals`` holds (code, start, end) rows in file order).
    """

    kind: str
    turns: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    intervals: Tuple[Tuple[str, float, float], ...] = ()

    @property
    def code_names(self) -> List[str]:
        if self.kind == "turn":
            return list(self.turns)
        names: List[str] = []
        for code, _, _ in self.intervals:
            if code not in names:
                names.append(code)
        return names


@dataclass
class CodeEntry:
    code: str
    color: str
    enabled: bool = True


class CodeRegistry:
    """
    Ordered set of known annotation codes with their display colours.

    New codes take the first palette colour not already used; once every
    colour is taken the palette is cycled.
    """

    def __init__(self, palette: Optional[List[str]] = None):
        self.palette = list(palette or USER_COLORS)
        self.entries: List[CodeEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, code: str) -> bool:
        return any(entry.code == code for entry in self.entries)

    @property
    def names(self) -> List[str]:
        return [entry.code for entry in self.entries]

    def get(self, code: str) -> Optional[CodeEntry]:
        for entry in self.entries:
            if entry.code == code:
                return entry
        return None

    def _next_color(self) -> str:
        used = {entry.color for entry in self.entries}
        for color in self.palette:
            if color not in used:
                return color
        return self.palette[len(self.entries) % len(self.palette)]

    def add_new_codes(self, names: Iterable[str]) -> List[CodeEntry]:
        """Append codes not yet registered; returns the entries added."""
        added: List[CodeEntry] = []
        for name in names:
            if not name or name in self:
                continue
            entry = CodeEntry(code=name, color=self._next_color())
            self.entries.append(entry)
            added.append(entry)
        return added

    def set_enabled(self, code: str, enabled: bool) -> None:
        entry = self.get(code)
        if entry is not None:
            entry.enabled = enabled

    def enabled_codes(self) -> List[str]:
        return [entry.code for entry in self.entries if entry.enabled]

    def clear(self) -> None:
        self.entries = []
