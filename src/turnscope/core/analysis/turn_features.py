"""Per-turn heuristics shared by fingerprints and question/answer pairing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from turnscope.core.domain.data_point import DataPoint, Turn, turns_from_words
from turnscope.core.utils.config.base import INTERROGATIVE_WORDS
from turnscope.utils.text_utils import normalize_word


def is_question_turn(turn: Turn) -> bool:
    """A turn is a question if it contains '?' or opens with an interrogative."""
    if "?" in turn.content:
        return True
    return normalize_word(turn.first_word.word) in INTERROGATIVE_WORDS


@dataclass(frozen=True)
class TurnFeatures:
    turn: Turn
    is_question: bool
    is_consecutive: bool
    is_interruption: bool


def chronological_turns(words: Sequence[DataPoint]) -> List[Turn]:
    """Turns sorted by start time, ties kept in turn-number order."""
    return sorted(turns_from_words(words), key=lambda turn: (turn.start_time, turn.turn_number))


def turn_features(words: Sequence[DataPoint], has_timing: bool = True) -> List[TurnFeatures]:
    """
    Classify every turn in chronological order.

    Consecutive: same speaker as the preceding turn. Interruption (timed
    transcripts only): starts before the end of the nearest preceding turn
    by a different speaker.
    """
    turns = chronological_turns(words)
    features: List[TurnFeatures] = []
    for index, turn in enumerate(turns):
        previous = turns[index - 1] if index > 0 else None
        is_consecutive = previous is not None and previous.speaker == turn.speaker

        is_interruption = False
        if has_timing:
            for earlier_index in range(index - 1, -1, -1):
                earlier = turns[earlier_index]
                if earlier.speaker != turn.speaker:
                    is_interruption = turn.start_time < earlier.end_time
                    break

        features.append(
            TurnFeatures(
                turn=turn,
                is_question=is_question_turn(turn),
                is_consecutive=is_consecutive,
                is_interruption=is_interruption,
            )
        )
    return features
