"""
Tests for building transcripts from parser output.
"""

import pytest

from turnscope.core.utils.config import USER_COLORS
from turnscope.io.subtitle_parser import parse_subtitle_text
from turnscope.io.text_parser import parse_transcript_text
from turnscope.io.transcript_factory import (
    create_transcript_from_parsed_text,
    create_transcript_from_subtitle,
)


def test_untimed_transcript_uses_word_positions(make_transcript):
    transcript = make_transcript([("A", "one two", None, None), ("B", "three", None, None)])
    assert transcript.timing_mode == "untimed"
    assert [dp.turn_number for dp in transcript.words] == [1, 1, 2]
    assert [(dp.start_time, dp.end_time) for dp in transcript.words] == [(0, 2), (0, 2), (2, 3)]


def test_start_only_transcript_infers_ends(make_transcript):
    transcript = make_transcript([("A", "hello there", 0.0, None), ("B", "hi", 5.0, None)])
    assert transcript.timing_mode == "startOnly"
    times = {dp.turn_number: (dp.start_time, dp.end_time) for dp in transcript.words}
    assert times == {1: (0.0, 5.0), 2: (5.0, 6.0)}


def test_start_end_transcript_keeps_turn_times(make_transcript):
    transcript = make_transcript([("A", "hello there", 0.0, 3.0), ("B", "hi", 5.0, 6.0)])
    assert transcript.timing_mode == "startEnd"
    assert (transcript.words[0].start_time, transcript.words[0].end_time) == (0.0, 3.0)


def test_missing_start_inherits_previous(make_transcript):
    transcript = make_transcript(
        [("A", "x", 0.0, None), ("B", "y", None, None), ("A", "z", 10.0, None)]
    )
    assert [dp.start_time for dp in transcript.words] == [0.0, 0.0, 10.0]


def test_punctuation_only_turns_are_skipped(make_transcript):
    transcript = make_transcript([("A", "...", None, None), ("B", "hello, world!", None, None)])
    assert [dp.turn_number for dp in transcript.words] == [1, 1]
    assert [dp.word for dp in transcript.words] == ["hello", "world"]
    assert [dp.display_word for dp in transcript.words] == ["hello,", "world!"]
    assert transcript.speaker_names == ["B"]


def test_speakers_get_palette_colors(colon_transcript_text):
    transcript = create_transcript_from_parsed_text(parse_transcript_text(colon_transcript_text))
    assert transcript.speaker_names == ["ALICE", "BOB", "CAROL"]
    assert [speaker.color for speaker in transcript.speakers] == USER_COLORS[:3]
    assert all(speaker.enabled for speaker in transcript.speakers)


def test_stats_are_attached(colon_transcript_text):
    transcript = create_transcript_from_parsed_text(parse_transcript_text(colon_transcript_text))
    assert transcript.stats["total_words"] == len(transcript.words)
    assert transcript.stats["total_turns"] == 5


def test_timestamped_text_is_start_only(timestamped_transcript_text):
    transcript = create_transcript_from_parsed_text(parse_transcript_text(timestamped_transcript_text))
    assert transcript.timing_mode == "startOnly"
    assert transcript.words[0].end_time == 10.0


def test_subtitle_words_spread_across_cue():
    result = parse_subtitle_text("00:00.000 --> 00:04.000\none two three four\n")
    transcript = create_transcript_from_subtitle(result, source="clip.vtt")
    assert transcript.timing_mode == "startEnd"
    assert [dp.start_time for dp in transcript.words] == pytest.approx([0.0, 1.0, 2.0, 3.0])
    assert transcript.words[-1].end_time == pytest.approx(4.0)
    assert transcript.source == "clip.vtt"
