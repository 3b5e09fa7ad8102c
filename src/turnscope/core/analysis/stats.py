"""
Aggregate transcript statistics.

These maxima drive scaling in the visualization layer (bar heights, word
sizes) and are recomputed for the revealed prefix by the engine.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any, Dict, Sequence

from turnscope.core.domain.data_point import DataPoint


@dataclass
class TranscriptStats:
    total_words: int = 0
    total_turns: int = 0
    total_time: float = 0.0
    largest_turn_length: int = 0
    largest_num_of_words_by_a_speaker: int = 0
    largest_num_of_turns_by_a_speaker: int = 0
    max_count_of_most_repeated_word: int = 0
    most_frequent_word: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def calculate_transcript_stats(words: Sequence[DataPoint]) -> TranscriptStats:
    """
    Compute aggregate statistics over a word array.

    Word frequency is case-insensitive on the bare word; ties for the most
    frequent word go to the word seen first.
    """
    if not words:
        return TranscriptStats()

    turn_lengths: Counter = Counter()
    speaker_words: Counter = Counter()
    speaker_turns: Dict[str, set] = {}
    word_counts: Counter = Counter()

    for dp in words:
        turn_lengths[dp.turn_number] += 1
        speaker_words[dp.speaker] += 1
        speaker_turns.setdefault(dp.speaker, set()).add(dp.turn_number)
        word_counts[dp.word.lower()] += 1

    most_frequent_word, max_count = word_counts.most_common(1)[0]

    return TranscriptStats(
        total_words=len(words),
        total_turns=len(turn_lengths),
        total_time=max(max(dp.start_time, dp.end_time) for dp in words),
        largest_turn_length=max(turn_lengths.values()),
        largest_num_of_words_by_a_speaker=max(speaker_words.values()),
        largest_num_of_turns_by_a_speaker=max(len(turns) for turns in speaker_turns.values()),
        max_count_of_most_repeated_word=max_count,
        most_frequent_word=most_frequent_word,
    )
