"""
Build Transcript objects from parser output.

Each non-empty turn is split into words; every word becomes a DataPoint
carrying its speaker and a turn number starting at 1. Word times then go
through the timing-mode rules so the array is consistent for analytics.
"""

from __future__ import annotations

from typing import List, Optional

from turnscope.core.analysis.stats import calculate_transcript_stats
from turnscope.core.domain.data_point import DataPoint
from turnscope.core.domain.parse_result import ParseResult
from turnscope.core.domain.transcript import Speaker, Transcript
from turnscope.core.utils.config.analysis import TimingConfig
from turnscope.core.utils.config.base import DEFAULT_SPEAKER, USER_COLORS
from turnscope.core.utils.logger import get_logger
from turnscope.io.timing import apply_timing_mode
from turnscope.utils.text_utils import split_into_word_tokens

logger = get_logger()


def build_speakers(names: List[str]) -> List[Speaker]:
    """Roster in first-appearance order, colours assigned by index."""
    return [
        Speaker(name=name, color=USER_COLORS[index % len(USER_COLORS)], enabled=True)
        for index, name in enumerate(names)
    ]


def _roster_from_words(words: List[DataPoint], declared: List[str]) -> List[str]:
    present = []
    for dp in words:
        if dp.speaker not in present:
            present.append(dp.speaker)
    # Keep parser order, drop speakers whose turns were all empty
    ordered = [name for name in declared if name in present]
    ordered.extend(name for name in present if name not in ordered)
    return ordered


def create_transcript_from_parsed_text(
    result: ParseResult,
    timing: Optional[TimingConfig] = None,
    source: Optional[str] = None,
) -> Transcript:
    """
    Create a transcript from text or table parser output.

    Timed turns give every word the turn's start time (and the turn's end
    time for start/end tables). Untimed words use their position in the
    transcript. In a timed transcript a turn without a time inherits the
    previous turn's start.
    """
    timing = timing or TimingConfig()
    if result.timing_mode:
        timing_mode = result.timing_mode
    else:
        timing_mode = "startOnly" if result.has_timestamps else "untimed"

    words: List[DataPoint] = []
    turn_number = 0
    position = 0
    previous_start = 0.0

    for turn in result.turns:
        tokens = split_into_word_tokens(turn.content)
        if not tokens:
            continue
        turn_number += 1

        timed = result.has_timestamps and timing_mode != "untimed"
        if timed:
            start = turn.start_time if turn.start_time is not None else previous_start
            end = turn.end_time if (timing_mode == "startEnd" and turn.end_time is not None) else start
            previous_start = start

        for word, display_word in tokens:
            if timed:
                start_time, end_time = start, end
            else:
                start_time, end_time = float(position), float(position + 1)
            words.append(
                DataPoint(
                    speaker=turn.speaker or DEFAULT_SPEAKER,
                    turn_number=turn_number,
                    word=word,
                    display_word=display_word,
                    start_time=float(start_time),
                    end_time=float(end_time),
                )
            )
            position += 1

    words = apply_timing_mode(words, timing_mode, timing)
    stats = calculate_transcript_stats(words)
    transcript = Transcript(
        words=words,
        timing_mode=timing_mode,
        speakers=build_speakers(_roster_from_words(words, result.speakers)),
        stats=stats.to_dict(),
        source=source,
    )
    logger.debug(
        f"Built transcript with {len(words)} words in {turn_number} turns (timing={timing_mode})"
    )
    return transcript


def create_transcript_from_subtitle(result: ParseResult, source: Optional[str] = None) -> Transcript:
    """
    Create a transcript from subtitle cues.

    Words are spread evenly across each cue's time span.
    """
    words: List[DataPoint] = []
    turn_number = 0

    for turn in result.turns:
        tokens = split_into_word_tokens(turn.content)
        if not tokens:
            continue
        turn_number += 1
        start = turn.start_time if turn.start_time is not None else 0.0
        end = turn.end_time if turn.end_time is not None else start
        step = (end - start) / len(tokens)
        for index, (word, display_word) in enumerate(tokens):
            words.append(
                DataPoint(
                    speaker=turn.speaker or DEFAULT_SPEAKER,
                    turn_number=turn_number,
                    word=word,
                    display_word=display_word,
                    start_time=start + index * step,
                    end_time=start + (index + 1) * step,
                )
            )

    stats = calculate_transcript_stats(words)
    return Transcript(
        words=words,
        timing_mode="startEnd",
        speakers=build_speakers(_roster_from_words(words, result.speakers)),
        stats=stats.to_dict(),
        source=source,
    )
