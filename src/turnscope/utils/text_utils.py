"""
Text processing utilities for turnscope.

This module provides the small text helpers shared by the parsers and the
analytics engine: speaker-name normalization, word normalization for
case- and accent-insensitive comparison, and word tokenization that keeps
the original display form of each token.
"""

import re
import unicodedata
from typing import List, Tuple

# Punctuation stripped from both ends of a token to get the bare word
_EDGE_PUNCTUATION = ",?.!:;"
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_speaker_name(name: str) -> str:
    """
    Normalize a speaker label: trim and upper-case.

    Examples:
        >>> normalize_speaker_name("  alice ")
        'ALICE'
    """
    return (name or "").strip().upper()


def strip_diacritics(text: str) -> str:
    """Remove combining accent marks ("café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def normalize_word(word: str) -> str:
    """
    Normalize a word for comparison: accent-folded, lower-cased, trimmed.

    Two words are treated as the same word when their normalized forms
    are equal; this is what repeat counting and stop-word filtering use.
    """
    return strip_diacritics(word or "").lower().strip()


def split_into_word_tokens(text: str) -> List[Tuple[str, str]]:
    """
    Split text into (word, display_word) pairs.

    Tokens are whitespace-separated. ``word`` has leading and trailing
    ``,?.!:;`` removed; ``display_word`` is the token as written. Tokens
    made only of that punctuation are dropped.

    Examples:
        >>> split_into_word_tokens("Hello, world!")
        [('Hello', 'Hello,'), ('world', 'world!')]
    """
    tokens: List[Tuple[str, str]] = []
    for token in _WHITESPACE_RE.split((text or "").strip()):
        if not token:
            continue
        word = token.strip(_EDGE_PUNCTUATION)
        if not word:
            continue
        tokens.append((word, token))
    return tokens


def count_words(text: str) -> int:
    """Count whitespace-separated tokens in text."""
    return len([token for token in _WHITESPACE_RE.split((text or "").strip()) if token])


def first_word(text: str) -> str:
    """Return the normalized first word of text, or an empty string."""
    tokens = split_into_word_tokens(text)
    return normalize_word(tokens[0][0]) if tokens else ""
