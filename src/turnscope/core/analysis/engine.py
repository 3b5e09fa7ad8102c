"""
Analytics engine.

The engine owns a reveal cursor (``end_index``) over a transcript's word
array and derives every view from the revealed prefix, an optional time
window, the speaker roster and an AnalysisConfig. It never mutates the
transcript; each result is built from fresh copies.

Results are cached under a key made of everything they depend on, so
moving the cursor, changing the window, editing codes (which bumps the
transcript version), changing a toggle or enabling a speaker all lead
to a recomputation on the next request.
"""

from __future__ import annotations

import time
from typing import Dict, Hashable, List, Optional, Tuple

from turnscope.core.analysis.cache import ResultCache
from turnscope.core.analysis.counting import RepeatCounter, count_repeats, filter_words
from turnscope.core.analysis.fingerprints import (
    SpeakerFingerprint,
    axis_maxima,
    compute_raw_fingerprints,
    compute_speaker_fingerprints,
)
from turnscope.core.analysis.grouping import (
    group_by_speaker,
    group_by_turn,
    sort_for_cloud,
    sort_speaker_groups,
)
from turnscope.core.analysis.qa_pairs import QuestionAnswerPair, question_answer_pairs
from turnscope.core.analysis.stats import TranscriptStats, calculate_transcript_stats
from turnscope.core.analysis.turn_network import NetworkData, build_turn_network
from turnscope.core.analysis.word_journey import WordJourney, word_journey
from turnscope.core.domain.data_point import DataPoint
from turnscope.core.domain.transcript import TimeWindow, Transcript
from turnscope.core.utils.config.analysis import AnalysisConfig
from turnscope.core.utils.logger import get_logger, log_performance

logger = get_logger()


class AnalyticsEngine:
    """Derives analytics from the revealed part of a transcript."""

    def __init__(self, transcript: Transcript, config: Optional[AnalysisConfig] = None):
        self.transcript = transcript
        self.config = config or AnalysisConfig()
        self.end_index = 0
        self.cache = ResultCache()
        self._counter: Optional[RepeatCounter] = None
        self._counter_key: Optional[Tuple] = None
        self._counter_consumed = 0

    # ------------------------------------------------------------------
    # Reveal cursor
    # ------------------------------------------------------------------

    def set_end_index(self, index: int) -> int:
        """Move the cursor, clamped to [0, number of words]. Returns it."""
        self.end_index = max(0, min(int(index), len(self.transcript.words)))
        return self.end_index

    def advance(self, step: int = 1) -> int:
        return self.set_end_index(self.end_index + step)

    def reveal_all(self) -> int:
        return self.set_end_index(len(self.transcript.words))

    def reset(self) -> None:
        """Rewind the cursor and drop all cached results."""
        self.end_index = 0
        self.cache.clear()
        self._counter = None
        self._counter_key = None
        self._counter_consumed = 0

    @property
    def is_complete(self) -> bool:
        return self.end_index >= len(self.transcript.words)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def enabled_speakers(self) -> Tuple[str, ...]:
        return tuple(self.transcript.enabled_speaker_names())

    def speaker_order(self) -> List[str]:
        return list(self.config.speaker_order) or self.transcript.speaker_names

    def _cache_key(self, name: str, time_window: Optional[TimeWindow], *extra: Hashable) -> Tuple:
        window = (time_window.left_marker, time_window.right_marker) if time_window else None
        return (
            name,
            self.end_index,
            window,
            self.transcript.version,
            self.config.cache_key(),
            self.enabled_speakers(),
            tuple(self.transcript.speaker_names),
            extra,
        )

    def revealed_words(self, time_window: Optional[TimeWindow] = None) -> List[DataPoint]:
        """Revealed words inside the window, without stop-word or speaker filters."""
        return filter_words(self.transcript.words[: self.end_index], time_window)

    # ------------------------------------------------------------------
    # Processed word stream
    # ------------------------------------------------------------------

    def processed_words(self, time_window: Optional[TimeWindow] = None) -> List[DataPoint]:
        """
        Revealed words filtered (window, stop words, disabled speakers) and
        annotated with repeat counts.
        """
        key = self._cache_key("processed", time_window)
        return list(self.cache.get_or_compute(key, lambda: self._compute_processed(time_window)))

    def _compute_processed(self, time_window: Optional[TimeWindow]) -> List[DataPoint]:
        config = self.config
        enabled = self.enabled_speakers()
        words = self.transcript.words

        if time_window is not None:
            selected = filter_words(
                words[: self.end_index], time_window, config.stop_words_filter, enabled
            )
            return count_repeats(selected, config.last_word_mode, config.echo_words)

        # Without a window the counter can be extended as the cursor advances
        counter_key = (
            self.transcript.version,
            config.last_word_mode,
            config.echo_words,
            config.stop_words_filter,
            enabled,
        )
        if (
            self._counter is None
            or self._counter_key != counter_key
            or self._counter_consumed > self.end_index
        ):
            self._counter = RepeatCounter(config.last_word_mode, config.echo_words)
            self._counter_key = counter_key
            self._counter_consumed = 0

        fresh = words[self._counter_consumed : self.end_index]
        self._counter.extend(filter_words(fresh, None, config.stop_words_filter, enabled))
        self._counter_consumed = self.end_index
        return self._counter.results()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def words_by_speaker(self, time_window: Optional[TimeWindow] = None) -> Dict[str, List[DataPoint]]:
        return group_by_speaker(self.processed_words(time_window))

    def sorted_speaker_groups(self, time_window: Optional[TimeWindow] = None) -> List[Tuple[str, List[DataPoint]]]:
        return sort_speaker_groups(
            self.words_by_speaker(time_window), self.config.speaker_sort, self.speaker_order()
        )

    def words_by_turn(self, time_window: Optional[TimeWindow] = None) -> Dict[int, List[DataPoint]]:
        return group_by_turn(self.processed_words(time_window))

    def cloud_words(self, time_window: Optional[TimeWindow] = None) -> List[DataPoint]:
        return sort_for_cloud(
            self.processed_words(time_window),
            self.config.sort_by_count,
            self.config.separate_speakers,
            self.speaker_order(),
        )

    def speaker_fingerprints(self, time_window: Optional[TimeWindow] = None) -> List[SpeakerFingerprint]:
        key = self._cache_key("fingerprints", time_window)

        def compute() -> List[SpeakerFingerprint]:
            started = time.perf_counter()
            maxima = None if self.config.scale_to_visible_data else self.full_transcript_maxima()
            result = compute_speaker_fingerprints(
                self.revealed_words(time_window),
                self.processed_words(time_window),
                self.enabled_speakers(),
                self.transcript.has_timing,
                maxima,
            )
            log_performance("speaker fingerprints", time.perf_counter() - started)
            return result

        return list(self.cache.get_or_compute(key, compute))

    def full_transcript_maxima(self) -> Dict[str, float]:
        """Fingerprint axis maxima over the entire transcript."""
        key = (
            "full-maxima",
            self.transcript.version,
            self.config.stop_words_filter,
            self.enabled_speakers(),
            self.transcript.has_timing,
        )

        def compute() -> Dict[str, float]:
            words = self.transcript.words
            enabled = self.enabled_speakers()
            counted = filter_words(words, None, self.config.stop_words_filter, enabled)
            raw = compute_raw_fingerprints(words, counted, enabled, self.transcript.has_timing)
            return axis_maxima(raw)

        return dict(self.cache.get_or_compute(key, compute))

    def question_answer_pairs(self, time_window: Optional[TimeWindow] = None) -> List[QuestionAnswerPair]:
        key = self._cache_key("qa", time_window)
        return list(
            self.cache.get_or_compute(
                key,
                lambda: question_answer_pairs(self.revealed_words(time_window), self.enabled_speakers()),
            )
        )

    def word_journey(self, term: Optional[str] = None, time_window: Optional[TimeWindow] = None) -> WordJourney:
        """Occurrences of ``term`` (default: the configured search word)."""
        term = term if term is not None else (self.config.word_to_search or "")
        key = self._cache_key("journey", time_window, term)
        return self.cache.get_or_compute(
            key,
            lambda: word_journey(self.processed_words(time_window), term, self.enabled_speakers()),
        )

    def turn_network(self, time_window: Optional[TimeWindow] = None) -> NetworkData:
        key = self._cache_key("network", time_window)
        return self.cache.get_or_compute(
            key, lambda: build_turn_network(self.processed_words(time_window))
        )

    def stats(self, time_window: Optional[TimeWindow] = None) -> TranscriptStats:
        key = self._cache_key("stats", time_window)
        return self.cache.get_or_compute(
            key, lambda: calculate_transcript_stats(self.revealed_words(time_window))
        )
