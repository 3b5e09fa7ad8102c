"""
SRT and WebVTT parser for turnscope.

Subtitles carry no reliable speaker information, so every cue becomes a
turn for the default speaker with the cue's start and end times.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from turnscope.core.domain.parse_result import ParsedTurn, ParseResult
from turnscope.core.utils.config.base import DEFAULT_SPEAKER
from turnscope.core.utils.logger import get_logger, log_file_operation

logger = get_logger()

_TIMESTAMP_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?$")
_TIMING_LINE_RE = re.compile(r"^([\d:,.]+)\s*-->\s*([\d:,.]+)")
_TAG_RE = re.compile(r"<[^>]+>")
_HEADER_PREFIXES = ("NOTE", "STYLE", "REGION")


@dataclass
class SubtitleCue:
    start: float
    end: float
    text: str


def parse_subtitle_timestamp(timestamp: str) -> float:
    """
    Parse an SRT (``00:00:01,500``) or VTT (``00:01.500``) timestamp.

    Raises:
        ValueError: If the timestamp is not in either format
    """
    normalized = timestamp.strip().replace(",", ".", 1)
    match = _TIMESTAMP_RE.match(normalized)
    if not match:
        raise ValueError(f"Invalid timestamp format: {timestamp}")

    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2))
    seconds = int(match.group(3))
    milliseconds = int(match.group(4).ljust(3, "0")) if match.group(4) else 0
    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000.0


def _is_header_line(line: str) -> bool:
    if line == "WEBVTT" or line.startswith("WEBVTT ") or line.startswith("WEBVTT\t"):
        return True
    return line.startswith(_HEADER_PREFIXES)


def parse_cues(text: str) -> List[SubtitleCue]:
    """Split subtitle text into cues, joining multi-line cue text with spaces."""
    cues: List[SubtitleCue] = []
    timing: Optional[tuple[float, float]] = None
    text_lines: List[str] = []

    def flush() -> None:
        nonlocal timing, text_lines
        if timing is not None and text_lines:
            cues.append(SubtitleCue(start=timing[0], end=timing[1], text=" ".join(text_lines)))
        timing = None
        text_lines = []

    lines = (text or "").lstrip("\ufeff").splitlines()
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if _is_header_line(trimmed):
            continue

        # Cue identifier, unless a cue is open and the number is its text
        if trimmed.isdigit():
            next_line = lines[index + 1].strip() if index + 1 < len(lines) else ""
            if timing is None or _TIMING_LINE_RE.match(next_line):
                continue

        timing_match = _TIMING_LINE_RE.match(trimmed)
        if timing_match:
            flush()
            try:
                timing = (
                    parse_subtitle_timestamp(timing_match.group(1)),
                    parse_subtitle_timestamp(timing_match.group(2)),
                )
            except ValueError as exc:
                logger.warning(f"Failed to parse timestamp line '{trimmed}': {exc}")
                timing = None
            continue

        if not trimmed:
            flush()
            continue

        if timing is not None:
            cleaned = _TAG_RE.sub("", trimmed).strip()
            if cleaned:
                text_lines.append(cleaned)

    flush()
    return cues


def parse_subtitle_text(text: str) -> ParseResult:
    """Parse SRT/VTT content into a ParseResult with one turn per cue."""
    cues = parse_cues(text)
    turns = [
        ParsedTurn(speaker=DEFAULT_SPEAKER, content=cue.text, start_time=cue.start, end_time=cue.end)
        for cue in cues
    ]
    return ParseResult(
        turns=turns,
        detected_format="timestamped",
        has_timestamps=True,
        speakers=[DEFAULT_SPEAKER] if turns else [],
        continuation_line_count=0,
        total_line_count=len(cues),
        timing_mode="startEnd",
    )


def parse_subtitle_file(path: str | Path) -> ParseResult:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Subtitle file not found: {path}")
    result = parse_subtitle_text(path.read_text(encoding="utf-8"))
    log_file_operation("parse", str(path), True)
    return result
