"""
Word-level records and the turns derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Tuple


@dataclass(frozen=True)
class DataPoint:
    """
    One spoken word.

    ``word`` is the punctuation-stripped token used for matching and
    counting; ``display_word`` is the token as written. ``count`` is only
    meaningful on the copies produced by repeat counting and is always 1 in
    the canonical word array.
    """

    speaker: str
    turn_number: int
    word: str
    start_time: float
    end_time: float
    display_word: str = ""
    count: int = 1
    codes: frozenset = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.display_word:
            object.__setattr__(self, "display_word", self.word)
        if not isinstance(self.codes, frozenset):
            object.__setattr__(self, "codes", frozenset(self.codes))

    def copy_with(self, **changes) -> "DataPoint":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "speaker": self.speaker,
            "turn_number": self.turn_number,
            "word": self.word,
            "display_word": self.display_word,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "count": self.count,
            "codes": sorted(self.codes),
        }


@dataclass(frozen=True)
class Turn:
    """A maximal run of words by one speaker sharing a turn number."""

    turn_number: int
    speaker: str
    words: Tuple[DataPoint, ...]

    @property
    def start_time(self) -> float:
        return min(dp.start_time for dp in self.words)

    @property
    def end_time(self) -> float:
        return max(dp.end_time for dp in self.words)

    @property
    def content(self) -> str:
        return " ".join(dp.display_word for dp in self.words)

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def first_word(self) -> DataPoint:
        return self.words[0]


def turns_from_words(words: Iterable[DataPoint]) -> List[Turn]:
    """
    Group consecutive DataPoints with the same turn number into turns.

    Words are expected in source order; a turn number that reappears after a
    different one starts a new Turn.
    """
    turns: List[Turn] = []
    current: List[DataPoint] = []
    for dp in words:
        if current and dp.turn_number != current[0].turn_number:
            turns.append(Turn(current[0].turn_number, current[0].speaker, tuple(current)))
            current = []
        current.append(dp)
    if current:
        turns.append(Turn(current[0].turn_number, current[0].speaker, tuple(current)))
    return turns
