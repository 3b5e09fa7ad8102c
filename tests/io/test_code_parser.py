"""
Tests for code-file detection, parsing and application.
"""

import logging
from pathlib import Path

import pytest

from turnscope.core.domain.data_point import DataPoint
from turnscope.core.domain.codes import ParsedCodes
from turnscope.io.code_parser import (
    apply_codes,
    apply_codes_by_time,
    code_name_from_file_name,
    extract_code_names,
    get_code_format_label,
    is_code_file,
    load_code_file,
    parse_code_file,
)
from turnscope.io.tabular import read_table_text
from turnscope.io.transcript_loader import load_transcript
from turnscope.utils.error_handling import CodeFileFormatError


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def interview():
    return load_transcript(FIXTURES_DIR / "transcripts" / "interview.txt")


def _coded_words(transcript, code):
    return [dp for dp in transcript.words if code in dp.codes]


class TestDetection:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("code,turn\nx,1\n", True),
            ("code,turn_start,turn_end\nx,1,2\n", True),
            ("start,end\n0,1\n", True),
            ("code,label\nx,y\n", True),
            ("speaker,content,code\nA,hi,x\n", False),
            ("foo,bar\n1,2\n", False),
            ("code,turn\n", False),
        ],
    )
    def test_is_code_file(self, text, expected):
        assert is_code_file(read_table_text(text)) is expected

    def test_format_labels(self):
        assert get_code_format_label(["code", "turn"]) == "Turn-based"
        assert get_code_format_label(["code", "turn_start", "turn_end"]) == "Turn range"
        assert get_code_format_label(["start", "end"]) == "Time-based"
        assert get_code_format_label(["code"]) == "Unknown"

    def test_code_name_from_file_name(self):
        assert code_name_from_file_name("off_topic-talk.csv") == "off topic talk"
        assert code_name_from_file_name("/data/codes/praise.csv") == "praise"

    def test_extract_code_names(self):
        rows = [{"code": "b"}, {"code": " a "}, {"code": "b"}, {"code": ""}]
        assert extract_code_names(rows, ["code"], "x.csv") == ["b", "a"]
        assert extract_code_names([], ["start", "end"], "side_talk.csv") == ["side talk"]


class TestParsing:
    def test_turn_rows_skip_bad_turn_numbers(self):
        table = read_table_text("code,turn\nx,1\nx,2.0\nx,2.5\nx,0\nx,-3\nx,abc\ny,4\n")
        parsed = parse_code_file(table)
        assert parsed.kind == "turn"
        assert parsed.turns == {"x": (1, 2), "y": (4,)}

    def test_turn_range_rows(self):
        table = read_table_text("code,turn_start,turn_end\nx,2,4\ny,5,3\n")
        parsed = parse_code_file(table)
        assert parsed.turns == {"x": (2, 3, 4)}

    def test_turn_range_too_large_is_skipped(self, caplog):
        table = read_table_text("code,turn_start,turn_end\nbig,1,20000\nsmall,1,2\n")
        with caplog.at_level(logging.WARNING, logger="turnscope"):
            parsed = parse_code_file(table)
        assert parsed.turns == {"small": (1, 2)}
        assert any("Turn range too large (20000 turns)" in r.getMessage() for r in caplog.records)

    def test_time_rows_with_code_column(self):
        table = read_table_text("code,start,end\na,0:01,0:03\nb,bad,0:05\n,1,2\n")
        parsed = parse_code_file(table)
        assert parsed.kind == "time"
        assert parsed.intervals == (("a", 1.0, 3.0),)

    def test_time_rows_named_after_file(self):
        table = read_table_text("start,end\n0,1\n2,3\n")
        parsed = parse_code_file(table, "side_talk.csv")
        assert parsed.code_names == ["side talk"]
        assert len(parsed.intervals) == 2

    def test_unknown_layout_raises(self):
        with pytest.raises(CodeFileFormatError) as exc_info:
            parse_code_file(read_table_text("code,label\nx,y\n"))
        assert exc_info.value.fields == ["code", "label"]


class TestApplication:
    def test_time_overlap_is_strict(self):
        words = [DataPoint("A", 1, "a", 0.0, 1.0), DataPoint("A", 1, "b", 1.0, 2.0)]
        parsed = ParsedCodes(kind="time", intervals=(("x", 1.0, 1.5),))
        coded = apply_codes_by_time(words, parsed)
        assert coded[0].codes == frozenset()
        assert coded[1].codes == frozenset({"x"})

    def test_codes_are_unioned(self):
        words = [DataPoint("A", 1, "a", 0.0, 1.0, codes={"old"})]
        parsed = ParsedCodes(kind="turn", turns={"new": (1,)})
        assert apply_codes(words, parsed)[0].codes == frozenset({"old", "new"})

    def test_application_does_not_mutate_input(self):
        words = [DataPoint("A", 1, "a", 0.0, 1.0)]
        apply_codes(words, ParsedCodes(kind="turn", turns={"x": (1,)}))
        assert words[0].codes == frozenset()


@pytest.mark.integration
class TestLoadCodeFile:
    def test_turn_codes(self, interview):
        added = load_code_file(interview, FIXTURES_DIR / "codes" / "turn_codes.csv")
        assert [entry.code for entry in added] == ["greeting", "budget"]
        assert len(_coded_words(interview, "greeting")) == 6
        assert len(_coded_words(interview, "budget")) == 7
        assert interview.version == 1

    def test_range_codes(self, interview):
        load_code_file(interview, FIXTURES_DIR / "codes" / "range_codes.csv")
        assert {dp.turn_number for dp in _coded_words(interview, "opening")} == {1, 2}

    def test_time_codes_named_after_file(self, interview):
        added = load_code_file(interview, FIXTURES_DIR / "codes" / "off_topic.csv")
        assert added[0].code == "off topic"
        assert {dp.turn_number for dp in _coded_words(interview, "off topic")} == {1}

    def test_reloading_does_not_duplicate_registry(self, interview):
        path = FIXTURES_DIR / "codes" / "turn_codes.csv"
        load_code_file(interview, path)
        assert load_code_file(interview, path) == []
        assert interview.codes.names == ["greeting", "budget"]

    def test_unknown_layout(self, interview):
        with pytest.raises(CodeFileFormatError):
            load_code_file(interview, FIXTURES_DIR / "codes" / "unknown_layout.csv")

    def test_transcript_table_is_not_a_code_file(self, interview, tmp_path):
        path = tmp_path / "transcript.csv"
        path.write_text("speaker,content,start,end\nAlice,hi,0,1\n")
        with pytest.raises(CodeFileFormatError, match="Not a code file"):
            load_code_file(interview, path)
