"""
Tests for the analytics engine: reveal cursor, caching and derived views.
"""

import pytest

from turnscope.core.analysis.counting import count_repeats
from turnscope.core.analysis.engine import AnalyticsEngine
from turnscope.core.domain.transcript import TimeWindow
from turnscope.core.utils.config import AnalysisConfig


@pytest.fixture
def transcript(make_transcript):
    # untimed: turn 1 spans [0, 3], turn 2 [3, 4], turn 3 [4, 6]
    return make_transcript(
        [("A", "cat cat the", None, None), ("B", "cat", None, None), ("A", "cat now", None, None)]
    )


def _counts(words):
    return [dp.count for dp in words]


class TestCursor:
    def test_clamping_and_advance(self, transcript):
        engine = AnalyticsEngine(transcript)
        assert engine.set_end_index(-5) == 0
        assert engine.set_end_index(100) == 6
        assert engine.is_complete
        engine.reset()
        assert engine.end_index == 0
        assert engine.advance(2) == 2
        assert engine.advance() == 3
        assert engine.reveal_all() == 6

    def test_nothing_revealed(self, transcript):
        engine = AnalyticsEngine(transcript)
        assert engine.processed_words() == []
        assert engine.speaker_fingerprints() == []
        assert engine.stats().total_words == 0


class TestProcessedWords:
    def test_first_word_counts(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        assert _counts(engine.processed_words()) == [3, 1, 1, 1, 1, 1]

    @pytest.mark.parametrize("last_word_mode,echo_words", [(False, False), (True, False), (True, True)])
    def test_incremental_reveal_matches_from_scratch(self, transcript, last_word_mode, echo_words):
        config = AnalysisConfig(last_word_mode=last_word_mode, echo_words=echo_words)
        engine = AnalyticsEngine(transcript, config)
        for index in range(len(transcript) + 1):
            engine.set_end_index(index)
            expected = count_repeats(transcript.words[:index], last_word_mode, echo_words)
            assert _counts(engine.processed_words()) == _counts(expected)

    def test_moving_cursor_backwards(self, transcript):
        engine = AnalyticsEngine(transcript, AnalysisConfig(last_word_mode=True))
        engine.reveal_all()
        engine.processed_words()
        engine.set_end_index(2)
        assert _counts(engine.processed_words()) == [1, 2]

    def test_window_applies_before_counting(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        words = engine.processed_words(TimeWindow(3, 6))
        assert [(dp.speaker, dp.word, dp.count) for dp in words] == [
            ("B", "cat", 1), ("A", "cat", 1), ("A", "now", 1)
        ]

    def test_stop_words_filter(self, transcript):
        engine = AnalyticsEngine(transcript, AnalysisConfig(stop_words_filter=True))
        engine.reveal_all()
        assert [dp.word for dp in engine.processed_words()] == ["cat", "cat", "cat", "cat"]

    def test_disabled_speaker_is_excluded(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        assert len(engine.processed_words()) == 6
        transcript.set_speaker_enabled("B", False)
        assert {dp.speaker for dp in engine.processed_words()} == {"A"}

    def test_results_are_copies(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        engine.processed_words()
        assert all(dp.count == 1 for dp in transcript.words)


class TestCaching:
    def test_mutating_a_result_does_not_leak(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        first = engine.turn_network()
        first.speaker_stats.clear()
        assert set(engine.turn_network().speaker_stats) == {"A", "B"}

        fingerprints = engine.speaker_fingerprints()
        fingerprints[0].normalized.clear()
        assert engine.speaker_fingerprints()[0].normalized != {}

    def test_repeat_request_hits_cache(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        engine.turn_network()
        misses = engine.cache.misses
        engine.turn_network()
        assert engine.cache.misses == misses
        assert engine.cache.hits >= 1

    def test_code_change_invalidates(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.reveal_all()
        assert not any(dp.codes for dp in engine.processed_words())
        transcript.replace_words(dp.copy_with(codes={"x"}) for dp in transcript.words)
        assert all("x" in dp.codes for dp in engine.processed_words())

    def test_config_change_invalidates(self, transcript):
        config = AnalysisConfig()
        engine = AnalyticsEngine(transcript, config)
        engine.reveal_all()
        before = _counts(engine.processed_words())
        config.last_word_mode = True
        assert _counts(engine.processed_words()) != before


class TestViews:
    def test_speaker_groups_and_turns(self, transcript):
        engine = AnalyticsEngine(transcript, AnalysisConfig(speaker_sort="words"))
        engine.reveal_all()
        assert [name for name, _ in engine.sorted_speaker_groups()] == ["A", "B"]
        assert sorted(engine.words_by_turn()) == [1, 2, 3]
        assert set(engine.words_by_speaker()) == {"A", "B"}

    def test_cloud_words_sorted_by_count(self, transcript):
        engine = AnalyticsEngine(transcript, AnalysisConfig(sort_by_count=True))
        engine.reveal_all()
        assert engine.cloud_words()[0].count == 3

    def test_word_journey_uses_configured_term(self, transcript):
        engine = AnalyticsEngine(transcript, AnalysisConfig(word_to_search="cat"))
        engine.reveal_all()
        assert len(engine.word_journey().occurrences) == 4
        assert len(engine.word_journey("now").occurrences) == 1

    def test_network_and_stats_follow_cursor(self, transcript):
        engine = AnalyticsEngine(transcript)
        engine.set_end_index(4)
        assert engine.turn_network().total_transitions() == 1
        assert engine.stats().total_words == 4
        engine.reveal_all()
        assert engine.turn_network().total_transitions() == 2
        assert engine.stats().total_words == 6


class TestFingerprintScaling:
    @pytest.fixture
    def uneven(self, make_transcript):
        return make_transcript(
            [("A", "one two", None, None), ("B", "three four five six", None, None), ("A", "seven", None, None)]
        )

    def test_scaled_to_visible_selection(self, uneven):
        engine = AnalyticsEngine(uneven)
        engine.set_end_index(2)
        (fp,) = engine.speaker_fingerprints()
        assert fp.normalized["avg_turn_length"] == 1.0

    def test_scaled_to_full_transcript(self, uneven):
        engine = AnalyticsEngine(uneven, AnalysisConfig(scale_to_visible_data=False))
        engine.set_end_index(2)
        (fp,) = engine.speaker_fingerprints()
        # revealed A averages 2 words per turn; B's 4 is the whole-transcript max
        assert fp.normalized["avg_turn_length"] == pytest.approx(0.5)
        assert engine.full_transcript_maxima()["avg_turn_length"] == 4.0


def test_questions_survive_stop_word_filter(make_transcript):
    transcript = make_transcript([("A", "What do you think", None, None), ("B", "Fine", None, None)])
    engine = AnalyticsEngine(transcript, AnalysisConfig(stop_words_filter=True))
    engine.reveal_all()
    pairs = engine.question_answer_pairs()
    assert len(pairs) == 1
    assert pairs[0].answer_speaker == "B"
