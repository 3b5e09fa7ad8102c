"""
Tests for text helpers.
"""

from turnscope.utils.text_utils import (
    count_words,
    first_word,
    normalize_speaker_name,
    normalize_word,
    split_into_word_tokens,
    strip_diacritics,
)


def test_normalize_speaker_name():
    assert normalize_speaker_name("  alice smith ") == "ALICE SMITH"
    assert normalize_speaker_name("") == ""


def test_normalize_word():
    assert strip_diacritics("naïve café") == "naive cafe"
    assert normalize_word(" Café ") == "cafe"


def test_split_into_word_tokens():
    assert split_into_word_tokens("Hello, world!  ... ok?") == [
        ("Hello", "Hello,"),
        ("world", "world!"),
        ("ok", "ok?"),
    ]
    assert split_into_word_tokens("") == []
    # inner punctuation is kept
    assert split_into_word_tokens("don't e.g.") == [("don't", "don't"), ("e.g", "e.g.")]


def test_count_and_first_word():
    assert count_words("  one two\tthree ") == 3
    assert count_words("") == 0
    assert first_word("?? What now") == "what"
    assert first_word("") == ""
