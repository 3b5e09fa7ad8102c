"""
Timing-mode handling for word arrays.

A transcript is ``untimed`` (times are word positions), ``startOnly``
(turn starts are known and ends must be inferred) or ``startEnd`` (both
known). These helpers rebuild word times for the first two modes.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from turnscope.core.domain.data_point import DataPoint
from turnscope.core.utils.config.analysis import TimingConfig

MIN_SPEECH_RATE = 0.1


def estimate_duration(word_count: int, speech_rate: float) -> float:
    """Estimated seconds to speak ``word_count`` words, never under 1s."""
    return max(1.0, word_count / max(speech_rate, MIN_SPEECH_RATE))


def recalculate_word_count_times(words: Sequence[DataPoint]) -> List[DataPoint]:
    """
    Give untimed words cumulative word-count times.

    Every word of a turn gets the same span: the number of words before the
    turn as start and the number up to the turn's last word as end.
    """
    spans: Dict[int, List[int]] = {}
    position = 0
    for dp in words:
        span = spans.setdefault(dp.turn_number, [position, position])
        position += 1
        span[1] = position

    return [
        dp.copy_with(start_time=float(spans[dp.turn_number][0]), end_time=float(spans[dp.turn_number][1]))
        for dp in words
    ]


def recalculate_end_times_from_starts(
    words: Sequence[DataPoint], timing: Optional[TimingConfig] = None
) -> List[DataPoint]:
    """
    Fill in turn end times for start-only transcripts.

    By default a turn ends where the next one starts. With
    ``preserve_gaps_between_turns`` each turn instead lasts its estimated
    speaking time. The last turn is always estimated, and so is any turn
    whose successor does not start after it (out-of-order timestamps).
    """
    timing = timing or TimingConfig()
    starts: Dict[int, float] = {}
    counts: Dict[int, int] = {}
    for dp in words:
        if dp.turn_number not in starts:
            starts[dp.turn_number] = dp.start_time
            counts[dp.turn_number] = 0
        counts[dp.turn_number] += 1

    ordered = sorted(starts)
    ends: Dict[int, float] = {}
    for index, turn_number in enumerate(ordered):
        is_last = index == len(ordered) - 1
        backwards = not is_last and starts[ordered[index + 1]] <= starts[turn_number]
        if is_last or backwards or timing.preserve_gaps_between_turns:
            duration = estimate_duration(counts[turn_number], timing.speech_rate_words_per_second)
            ends[turn_number] = starts[turn_number] + duration
        else:
            ends[turn_number] = starts[ordered[index + 1]]

    return [dp.copy_with(end_time=ends[dp.turn_number]) for dp in words]


def apply_timing_mode(
    words: Sequence[DataPoint], timing_mode: str, timing: Optional[TimingConfig] = None
) -> List[DataPoint]:
    """Recompute word times for the given timing mode."""
    if timing_mode == "untimed":
        return recalculate_word_count_times(words)
    if timing_mode == "startOnly":
        return recalculate_end_times_from_starts(words, timing)
    return list(words)


def get_max_time(words: Sequence[DataPoint]) -> float:
    """Largest start or end time in the array (at least 1)."""
    return max([1.0] + [max(dp.start_time, dp.end_time) for dp in words])
