"""
Repeat counting over the processed word stream.

Each word is keyed by (speaker, normalized word). Two modes:

- first-word (default): the first occurrence of a key carries the running
  total; later occurrences keep 1.
- last-word: each new occurrence gets the previous occurrence's count + 1.
  Unless echo is enabled, the previous occurrence drops back to 1 so only
  the newest instance shows the total.

The counter is incremental: feeding it a longer prefix after a shorter one
gives the same result as counting the longer prefix from scratch.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from turnscope.core.domain.data_point import DataPoint
from turnscope.core.domain.transcript import TimeWindow
from turnscope.core.utils.config.base import STOP_WORDS
from turnscope.utils.text_utils import normalize_word


def is_stop_word(word: str) -> bool:
    return normalize_word(word) in STOP_WORDS


def repeat_key(dp: DataPoint) -> Tuple[str, str]:
    return (dp.speaker, normalize_word(dp.word))


class RepeatCounter:
    """Running repeat counts for a stream of DataPoints."""

    def __init__(self, last_word_mode: bool = False, echo_words: bool = False):
        self.last_word_mode = last_word_mode
        self.echo_words = echo_words
        self._points: List[DataPoint] = []
        self._counts: List[int] = []
        # first occurrence index (first-word mode) or latest index (last-word mode)
        self._anchor: Dict[Tuple[str, str], int] = {}

    def __len__(self) -> int:
        return len(self._points)

    def add(self, dp: DataPoint) -> None:
        key = repeat_key(dp)
        index = len(self._points)
        anchor = self._anchor.get(key)

        if anchor is None:
            self._counts.append(1)
            self._anchor[key] = index
        elif self.last_word_mode:
            self._counts.append(self._counts[anchor] + 1)
            if not self.echo_words:
                self._counts[anchor] = 1
            self._anchor[key] = index
        else:
            self._counts[anchor] += 1
            self._counts.append(1)

        self._points.append(dp)

    def extend(self, points: Iterable[DataPoint]) -> None:
        for dp in points:
            self.add(dp)

    def results(self) -> List[DataPoint]:
        """Fresh copies of the counted points with ``count`` set."""
        return [dp.copy_with(count=count) for dp, count in zip(self._points, self._counts)]


def filter_words(
    words: Iterable[DataPoint],
    time_window: Optional[TimeWindow] = None,
    stop_words_filter: bool = False,
    enabled_speakers: Optional[Sequence[str]] = None,
) -> List[DataPoint]:
    """Apply the time window, stop-word and speaker filters (in that order)."""
    enabled = set(enabled_speakers) if enabled_speakers is not None else None
    selected = []
    for dp in words:
        if time_window is not None and not time_window.contains(dp):
            continue
        if stop_words_filter and is_stop_word(dp.word):
            continue
        if enabled is not None and dp.speaker not in enabled:
            continue
        selected.append(dp)
    return selected


def count_repeats(
    words: Iterable[DataPoint], last_word_mode: bool = False, echo_words: bool = False
) -> List[DataPoint]:
    """Count repeats from scratch; returns fresh copies."""
    counter = RepeatCounter(last_word_mode, echo_words)
    counter.extend(words)
    return counter.results()
