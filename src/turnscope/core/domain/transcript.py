"""
Transcript container, speaker roster and time window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from turnscope.core.domain.codes import CodeRegistry
from turnscope.core.domain.data_point import DataPoint, Turn, turns_from_words


@dataclass
class Speaker:
    name: str
    color: str
    enabled: bool = True


@dataclass(frozen=True)
class TimeWindow:
    """Visible time range, in seconds."""

    left_marker: float
    right_marker: float

    def contains(self, dp: DataPoint) -> bool:
        return dp.start_time >= self.left_marker and dp.end_time <= self.right_marker


class Transcript:
    """
    The canonical word array plus the metadata the analytics need.

    The word array is stored as a tuple and only ever replaced as a whole,
    through ``replace_words`` and ``clear_codes``. Each replacement bumps
    ``version`` so cached analytics keyed on it go stale.
    """

    def __init__(
        self,
        words: Sequence[DataPoint] = (),
        timing_mode: str = "untimed",
        speakers: Optional[List[Speaker]] = None,
        stats: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ):
        self._words: Tuple[DataPoint, ...] = tuple(words)
        self.timing_mode = timing_mode
        self.speakers: List[Speaker] = list(speakers or [])
        self.codes = CodeRegistry()
        self.stats: Dict[str, Any] = dict(stats or {})
        self.source = source
        self.version = 0

    def __len__(self) -> int:
        return len(self._words)

    @property
    def words(self) -> Tuple[DataPoint, ...]:
        return self._words

    @property
    def has_timing(self) -> bool:
        return self.timing_mode != "untimed"

    @property
    def speaker_names(self) -> List[str]:
        return [speaker.name for speaker in self.speakers]

    def enabled_speaker_names(self) -> List[str]:
        return [speaker.name for speaker in self.speakers if speaker.enabled]

    def get_speaker(self, name: str) -> Optional[Speaker]:
        for speaker in self.speakers:
            if speaker.name == name:
                return speaker
        return None

    def set_speaker_enabled(self, name: str, enabled: bool) -> None:
        speaker = self.get_speaker(name)
        if speaker is not None:
            speaker.enabled = enabled

    def turns(self) -> List[Turn]:
        return turns_from_words(self._words)

    def max_time(self) -> float:
        return max((dp.end_time for dp in self._words), default=0.0)

    def replace_words(self, words: Iterable[DataPoint]) -> None:
        """Swap in a new word array (e.g. a code-annotated copy)."""
        self._words = tuple(words)
        self.version += 1

    def clear_codes(self) -> None:
        """Remove every code from every word and empty the code registry."""
        self._words = tuple(
            dp.copy_with(codes=frozenset()) if dp.codes else dp for dp in self._words
        )
        self.codes.clear()
        self.version += 1
