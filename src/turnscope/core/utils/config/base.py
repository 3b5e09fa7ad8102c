"""Shared configuration constants."""

from __future__ import annotations

# Label used for turns whose speaker cannot be determined
DEFAULT_SPEAKER = "SPEAKER 1"

# Palette for speakers and annotation codes, assigned in order and cycled
USER_COLORS = [
    "#4E79A7",
    "#F28E2B",
    "#E15759",
    "#76B7B2",
    "#59A14F",
    "#EDC948",
    "#B07AA1",
    "#FF9DA7",
    "#9C755F",
    "#BAB0AC",
    "#1F77B4",
    "#D62728",
]

# Turn-range annotation rows spanning more turns than this are dropped
MAX_TURN_RANGE = 10000

# Minimum similarity for a fuzzy column-name match
COLUMN_MATCH_THRESHOLD = 0.6

# Stop words filtered from the word stream when stop_words_filter is enabled.
# Compared against normalized (lower-cased, accent-folded) words.
STOP_WORDS = frozenset(
    [
        # Articles
        "a", "an", "the",
        # Conjunctions
        "and", "or", "but", "if", "then", "than", "because", "while", "until",
        "although", "though",
        # Prepositions
        "of", "to", "in", "from", "by", "with", "as", "at", "for", "on", "about",
        "into", "during", "after", "before", "above", "below", "around",
        "between", "under", "out", "over", "through", "off",
        # Pronouns
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us",
        "them", "my", "your", "his", "its", "our", "their", "that", "which",
        "who", "whom", "whose", "what", "this", "these", "those",
        # Quantifiers
        "all", "any", "some", "each", "every", "both", "either", "neither",
        "more", "most", "less", "least", "much", "many", "few", "such", "other",
        "another", "same",
        # Be/Have/Do verbs
        "is", "are", "was", "were", "am", "be", "been", "being", "have", "has",
        "had", "having", "do", "does", "did", "doing",
        # Modal verbs
        "can", "could", "will", "would", "may", "might", "must", "shall",
        "should",
        # Common verbs
        "get", "got", "getting", "go", "going", "gone", "went", "come",
        "coming", "came", "make", "made", "making", "know", "knew", "known",
        "think", "thought", "say", "said", "see", "saw", "seen",
        # Adverbs
        "not", "no", "yes", "here", "there", "when", "where", "how", "why",
        "up", "down", "even", "very", "just", "so", "only", "now", "still",
        "also", "too", "well", "really", "quite", "rather", "always", "never",
        "often", "sometimes", "already", "again", "back", "away",
        # Contractions
        "don't", "doesn't", "didn't", "won't", "can't", "couldn't", "wouldn't",
        "shouldn't", "isn't", "aren't", "wasn't", "weren't", "haven't",
        "hasn't", "hadn't", "i'm", "you're", "he's", "she's", "it's", "we're",
        "they're", "i've", "you've", "we've", "they've", "i'll", "you'll",
        "he'll", "she'll", "we'll", "they'll", "i'd", "you'd", "he'd", "she'd",
        "we'd", "they'd", "that's", "there's", "here's", "what's", "who's",
        "let's",
        # Spoken fillers
        "uh", "um", "like", "yeah", "okay", "ok", "oh", "ah", "gonna", "wanna",
        "gotta", "kinda", "sorta", "basically", "actually", "literally",
        "right", "mean",
    ]
)

# A turn counts as a question when its first word is one of these
INTERROGATIVE_WORDS = frozenset(
    [
        "who", "what", "when", "where", "why", "how", "which", "whose", "whom",
        "is", "are", "was", "were", "am",
        "do", "does", "did",
        "can", "could", "will", "would", "should", "shall", "may", "might",
        "have", "has", "had",
        "isn't", "aren't", "don't", "doesn't", "didn't", "can't", "won't",
    ]
)

SPEAKER_SORT_OPTIONS = ("none", "words", "turns", "name")
TIMING_MODES = ("untimed", "startOnly", "startEnd")
