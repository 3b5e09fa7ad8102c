"""
Tests for line-pattern transcript parsing.
"""

import pytest

from turnscope.core.utils.config import DEFAULT_SPEAKER
from turnscope.io.text_parser import (
    get_format_description,
    is_likely_speaker,
    merge_same_speaker_turns,
    parse_transcript_text,
)


class TestLineFormats:
    def test_speaker_tab_time_content(self):
        result = parse_transcript_text("Alice:\t00:01:05\tHello there")
        turn = result.turns[0]
        assert (turn.speaker, turn.start_time, turn.content) == ("ALICE", 65.0, "Hello there")
        assert result.detected_format == "timestamped"

    def test_time_tab_speaker_content(self):
        result = parse_transcript_text("00:00:10\tBob Smith\tWelcome back")
        turn = result.turns[0]
        assert (turn.speaker, turn.start_time, turn.content) == ("BOB SMITH", 10.0, "Welcome back")

    def test_bracketed_timestamp_with_speaker(self):
        result = parse_transcript_text("[1:02.5] Alice: Fractions work")
        turn = result.turns[0]
        assert turn.speaker == "ALICE"
        assert turn.start_time == pytest.approx(62.5)
        assert result.has_timestamps

    def test_bracketed_timestamp_without_speaker(self):
        result = parse_transcript_text("[0:05] just some captions here")
        turn = result.turns[0]
        assert turn.speaker == DEFAULT_SPEAKER
        assert turn.start_time == 5.0
        assert turn.content == "just some captions here"

    def test_colon_format(self, colon_transcript_text):
        result = parse_transcript_text(colon_transcript_text)
        assert result.detected_format == "colon"
        assert result.speakers == ["ALICE", "BOB", "CAROL"]
        assert len(result.turns) == 5
        assert not result.has_timestamps

    def test_tab_separated(self):
        result = parse_transcript_text("Alice\tHi\nBob\tHello")
        assert [turn.speaker for turn in result.turns] == ["ALICE", "BOB"]
        assert result.detected_format == "tab-separated"

    def test_single_initial_is_a_speaker(self):
        result = parse_transcript_text("H: hello")
        assert result.turns[0].speaker == "H"


class TestChatLog:
    def test_times_become_offsets(self):
        text = "[10:00 AM] Alice: morning\n[10:05 AM] Bob: hi"
        result = parse_transcript_text(text)
        assert result.detected_format == "chat-log"
        assert [turn.start_time for turn in result.turns] == [0.0, 300.0]

    def test_midnight_rollover_adds_a_day(self):
        text = "[11:58 PM] Alice: late\n[12:02 AM] Bob: later"
        result = parse_transcript_text(text)
        assert result.turns[1].start_time == 240.0


class TestContinuationsAndDetection:
    def test_unmatched_lines_append_to_previous_turn(self):
        result = parse_transcript_text("Alice: first line\nsecond line\n\nthird line")
        assert len(result.turns) == 1
        assert result.turns[0].content == "first line second line third line"
        assert result.continuation_line_count == 2
        assert result.total_line_count == 3

    def test_leading_continuation_starts_default_turn(self):
        result = parse_transcript_text("no speaker here\nAlice: hi")
        assert result.turns[0].speaker == DEFAULT_SPEAKER
        assert result.turns[1].speaker == "ALICE"

    def test_long_label_is_not_a_speaker(self):
        result = parse_transcript_text("Alice: see below\nand then we said something like: hello")
        assert len(result.turns) == 1
        assert result.turns[0].content.endswith("something like: hello")

    def test_mixed_formats(self):
        result = parse_transcript_text("[0:01] Alice: hi\nBob: hello")
        assert result.detected_format == "mixed"

    def test_empty_input(self):
        result = parse_transcript_text("")
        assert result.turns == []
        assert result.detected_format == "plain"

    def test_all_line_endings(self):
        result = parse_transcript_text("Alice: a\r\nBob: b\rCarol: c")
        assert len(result.turns) == 3


class TestForcedFormat:
    def test_plain_makes_one_turn_per_line(self):
        result = parse_transcript_text("Alice: hi\nBob: yo", force_format="plain")
        assert [turn.speaker for turn in result.turns] == [DEFAULT_SPEAKER, DEFAULT_SPEAKER]
        assert result.turns[0].content == "Alice: hi"
        assert result.detected_format == "plain"

    def test_forced_colon_ignores_timestamps(self):
        result = parse_transcript_text("Alice\thello", force_format="colon")
        assert result.turns[0].speaker == DEFAULT_SPEAKER
        assert result.continuation_line_count == 1

    def test_unknown_format_raises(self):
        with pytest.raises(ValueError):
            parse_transcript_text("Alice: hi", force_format="yaml")


def test_is_likely_speaker():
    assert is_likely_speaker("Dr Jane Smith")
    assert not is_likely_speaker("")
    assert not is_likely_speaker("123")
    assert not is_likely_speaker("[0")
    assert not is_likely_speaker("one two three four five")
    assert not is_likely_speaker("x" * 41)
    assert not is_likely_speaker("mail me@example.com")


def test_merge_same_speaker_turns():
    result = parse_transcript_text("[0:00] Alice: one\n[0:05] Alice: two\n[0:10] Bob: three")
    merged = merge_same_speaker_turns(result)
    assert [turn.content for turn in merged.turns] == ["one two", "three"]
    assert merged.turns[0].start_time == 0.0
    # input untouched
    assert len(result.turns) == 3
    assert result.turns[0].content == "one"


def test_format_description():
    assert get_format_description("colon") == "Speaker: content"
    assert get_format_description("nope") == "Unknown format"


def test_merge_is_idempotent():
    once = merge_same_speaker_turns(parse_transcript_text("Alice: a\nAlice: b\nBob: c\nBob: d"))
    twice = merge_same_speaker_turns(once)
    assert [(turn.speaker, turn.content) for turn in twice.turns] == [
        (turn.speaker, turn.content) for turn in once.turns
    ]
