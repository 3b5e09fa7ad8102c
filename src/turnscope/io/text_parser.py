"""
Per-line pattern matching for pasted transcript text.

Supported line shapes, in match priority order:

1. ``Speaker:<TAB>HH:MM:SS<TAB>content``  research transcripts
2. ``HH:MM:SS<TAB>Speaker<TAB>content``   Zoom exports
3. ``[HH:MM:SS] Speaker: content``        bracketed timestamps (colon or tab)
4. ``[HH:MM:SS] content``                 auto-captions, no speaker
5. ``[HH:MM AM/PM] Speaker: content``     chat logs (Slack, Discord)
6. ``Speaker: content``                   colon format
7. ``Speaker<TAB>content``                tab-separated

A line that matches nothing is a continuation of the previous turn. Parsing
never fails; the worst case is a single default-speaker turn.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

from turnscope.core.domain.parse_result import ParsedTurn, ParseResult
from turnscope.core.utils.config.base import DEFAULT_SPEAKER
from turnscope.core.utils.logger import get_logger
from turnscope.core.utils.time_utils import SECONDS_PER_DAY, parse_chat_time, to_seconds
from turnscope.utils.text_utils import normalize_speaker_name

logger = get_logger()

LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RUN_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"^\d+$")

_TS = r"\d{1,2}:\d{2}(?::\d{2})?"
_TS_FRACTION = _TS + r"(?:[.,]\d{1,3})?"

FORMAT_DESCRIPTIONS: Dict[str, str] = {
    "timestamped": "[Timestamp] Speaker: content",
    "chat-log": "[Time AM/PM] Speaker: content",
    "colon": "Speaker: content",
    "tab-separated": "Speaker<tab>content",
    "mixed": "Mixed formats",
    "plain": "Plain text",
}

# (value, label) pairs offered when the user overrides detection
SELECTABLE_FORMATS = [
    ("auto", "Auto-detect"),
    ("timestamped", "[0:00] Speaker: content"),
    ("chat-log", "[12:00 PM] Speaker: content"),
    ("colon", "Speaker: content"),
    ("tab-separated", "Speaker<tab>content"),
    ("plain", "Plain text (single speaker)"),
]


def is_likely_speaker(text: str) -> bool:
    """
    Decide whether a candidate label looks like a speaker name.

    Rejects empty or over-long labels, labels starting with a bracket
    (a broken timestamp such as ``[0``), URL-ish text, bare numbers and
    anything with more than four words. Single initials like ``H`` pass.
    """
    trimmed = (text or "").strip()
    if not trimmed or len(trimmed) > 40:
        return False
    if trimmed.startswith("[") or trimmed.startswith("]"):
        return False
    if "//" in trimmed or "@" in trimmed or "www." in trimmed:
        return False
    if _DIGITS_RE.match(trimmed):
        return False
    if len(_WHITESPACE_RUN_RE.findall(trimmed)) > 3:
        return False
    return True


def _make_turn(speaker: str, content: str, start_time: Optional[float] = None) -> ParsedTurn:
    return ParsedTurn(
        speaker=normalize_speaker_name(speaker),
        content=content.strip(),
        start_time=start_time,
        end_time=None,
    )


def _speaker_time_content(match: re.Match) -> Optional[ParsedTurn]:
    speaker, stamp, content = match.groups()
    if not is_likely_speaker(speaker):
        return None
    return _make_turn(speaker, content, to_seconds(stamp))


def _time_speaker_content(match: re.Match) -> Optional[ParsedTurn]:
    stamp, speaker, content = match.groups()
    if not is_likely_speaker(speaker):
        return None
    return _make_turn(speaker, content, to_seconds(stamp))


def _time_only_content(match: re.Match) -> Optional[ParsedTurn]:
    stamp, remainder = match.groups()
    # "[0:05] Bob: hi" with an unlikely speaker falls through to here; keep
    # lines that still look speaker-prefixed out of the default speaker
    if ":" in remainder and is_likely_speaker(remainder.split(":")[0]):
        return None
    if "\t" in remainder and is_likely_speaker(remainder.split("\t")[0]):
        return None
    return _make_turn(DEFAULT_SPEAKER, remainder, to_seconds(stamp))


def _chat_log(match: re.Match) -> Optional[ParsedTurn]:
    stamp, speaker, content = match.groups()
    if not is_likely_speaker(speaker):
        return None
    return _make_turn(speaker, content, parse_chat_time(stamp))


def _speaker_content(match: re.Match) -> Optional[ParsedTurn]:
    speaker, content = match.groups()
    if not is_likely_speaker(speaker):
        return None
    return _make_turn(speaker, content)


@dataclass(frozen=True)
class LinePattern:
    """One entry of the rule table: format name, regex and extractor."""

    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match], Optional[ParsedTurn]]

    def parse(self, line: str) -> Optional[ParsedTurn]:
        match = self.pattern.match(line)
        if not match:
            return None
        return self.extract(match)


LINE_PATTERNS: List[LinePattern] = [
    LinePattern(
        "timestamped",
        re.compile(rf"^([^:\t]+):\t({_TS})\t(.+)$"),
        _speaker_time_content,
    ),
    LinePattern(
        "timestamped",
        re.compile(rf"^({_TS})\t([^\t]+)\t(.+)$"),
        _time_speaker_content,
    ),
    LinePattern(
        "timestamped",
        re.compile(rf"^\[({_TS_FRACTION})\]\s*([^:\t]+)[:\t]\s*(.+)$"),
        _time_speaker_content,
    ),
    LinePattern(
        "timestamped",
        re.compile(rf"^\[({_TS_FRACTION})\]\s*(.+)$"),
        _time_only_content,
    ),
    LinePattern(
        "chat-log",
        re.compile(rf"^\[({_TS}\s*[AP]M)\]\s*([^:]+):\s*(.+)$", re.IGNORECASE),
        _chat_log,
    ),
    LinePattern("colon", re.compile(r"^([^:]+):\s*(.+)$"), _speaker_content),
    LinePattern("tab-separated", re.compile(r"^([^\t]+)\t(.+)$"), _speaker_content),
]

FORMAT_NAMES = ("timestamped", "chat-log", "colon", "tab-separated", "mixed", "plain")


def _active_patterns(force_format: Optional[str]) -> List[LinePattern]:
    if force_format is None or force_format in ("mixed", "plain", "auto"):
        return LINE_PATTERNS
    return [rule for rule in LINE_PATTERNS if rule.name == force_format]


def _dominant_format(format_counts: Counter) -> str:
    if not format_counts:
        return "plain"
    non_plain = [name for name in format_counts if name != "plain"]
    if len(non_plain) > 1:
        return "mixed"
    # Counter.most_common keeps insertion order among ties
    return format_counts.most_common(1)[0][0]


def _normalize_wall_clock(turns: List[ParsedTurn], chat_log_indices: List[int]) -> None:
    """
    Turn chat-log wall-clock times into offsets from the first one.

    A time earlier than the previous chat-log time is read as a midnight
    rollover and adds a day.
    """
    base_time: Optional[float] = None
    previous_raw: Optional[float] = None
    day_offset = 0

    for index in chat_log_indices:
        turn = turns[index]
        if turn.start_time is None:
            continue
        raw = turn.start_time
        if base_time is None:
            base_time = raw
        elif previous_raw is not None and raw < previous_raw:
            day_offset += SECONDS_PER_DAY
        turn.start_time = raw + day_offset - base_time
        previous_raw = raw


def parse_transcript_text(text: str, force_format: Optional[str] = None) -> ParseResult:
    """
    Parse pasted transcript text into speaker turns.

    Args:
        text: Raw text, any line-ending convention
        force_format: Restrict matching to one format's rules. ``plain``
            makes every line its own default-speaker turn; ``mixed``,
            ``auto`` or None use all rules.

    Returns:
        ParseResult with turns in source order and the dominant format

    Raises:
        ValueError: If force_format is not a known format name
    """
    if force_format is not None and force_format not in FORMAT_NAMES and force_format != "auto":
        raise ValueError(f"Unknown transcript format: {force_format}")

    patterns = _active_patterns(force_format)
    turns: List[ParsedTurn] = []
    format_counts: Counter = Counter()
    chat_log_indices: List[int] = []
    continuation_line_count = 0
    total_line_count = 0

    for line in LINE_SPLIT_RE.split(text or ""):
        trimmed = line.strip()
        if not trimmed:
            continue
        total_line_count += 1

        if force_format == "plain":
            turns.append(_make_turn(DEFAULT_SPEAKER, trimmed))
            format_counts["plain"] += 1
            continue

        for rule in patterns:
            turn = rule.parse(trimmed)
            if turn is not None:
                if rule.name == "chat-log":
                    chat_log_indices.append(len(turns))
                turns.append(turn)
                format_counts[rule.name] += 1
                break
        else:
            continuation_line_count += 1
            if turns:
                turns[-1].content += " " + trimmed
            else:
                turns.append(_make_turn(DEFAULT_SPEAKER, trimmed))

    if chat_log_indices:
        _normalize_wall_clock(turns, chat_log_indices)

    speakers: List[str] = []
    for turn in turns:
        if turn.speaker not in speakers:
            speakers.append(turn.speaker)

    result = ParseResult(
        turns=turns,
        detected_format=_dominant_format(format_counts),
        has_timestamps=any(turn.start_time is not None for turn in turns),
        speakers=speakers,
        continuation_line_count=continuation_line_count,
        total_line_count=total_line_count,
    )
    logger.debug(
        f"Parsed {total_line_count} lines into {len(turns)} turns "
        f"(format={result.detected_format}, continuations={continuation_line_count})"
    )
    return result


def merge_same_speaker_turns(result: ParseResult) -> ParseResult:
    """
    Fold consecutive turns by the same speaker into one.

    The merged turn keeps the first turn's start time and the latest known
    end time; contents are joined with a space. Returns a new ParseResult
    and leaves the input untouched.
    """
    if len(result.turns) <= 1:
        return replace(result, turns=[replace(turn) for turn in result.turns])

    merged: List[ParsedTurn] = [replace(result.turns[0])]
    for turn in result.turns[1:]:
        previous = merged[-1]
        if turn.speaker == previous.speaker:
            previous.content += " " + turn.content
            if turn.end_time is not None:
                previous.end_time = turn.end_time
        else:
            merged.append(replace(turn))

    return replace(result, turns=merged, speakers=list(result.speakers))


def get_format_description(format_name: str) -> str:
    return FORMAT_DESCRIPTIONS.get(format_name, "Unknown format")
