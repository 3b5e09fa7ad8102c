"""
Parser output shared by the text, subtitle and tabular readers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ParsedTurn:
    speaker: str
    content: str
    start_time: Optional[float] = None
    end_time: Optional[float] = None


@dataclass
class ParseResult:
    """
    Ordered speaker turns plus what the parser learned about the input.

    ``detected_format`` is one of the line-format names (``colon``,
    ``chat-log``, ...), ``mixed`` or ``plain``. ``timing_mode`` is only
    set by the tabular reader, which can tell start-only from start/end
    input.
    """

    turns: List[ParsedTurn] = field(default_factory=list)
    detected_format: str = "plain"
    has_timestamps: bool = False
    speakers: List[str] = field(default_factory=list)
    continuation_line_count: int = 0
    total_line_count: int = 0
    timing_mode: Optional[str] = None
