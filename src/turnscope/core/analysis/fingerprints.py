"""
Speaker fingerprints: per-speaker behavioural profiles.

Each fingerprint holds raw totals, raw rates and the same rates normalized
to [0, 1] against reference maxima. The maxima come either from the
speakers in the current selection or from a whole-transcript pass, so the
radar shapes are either locally contrastive or stable while scrubbing.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

from turnscope.core.analysis.turn_features import turn_features
from turnscope.core.domain.data_point import DataPoint
from turnscope.utils.text_utils import normalize_word

AXES = (
    "avg_turn_length",
    "participation_rate",
    "verbosity_rate",
    "vocabulary_diversity",
    "question_rate",
    "interruption_rate",
    "consecutive_rate",
)


@dataclass
class SpeakerFingerprint:
    speaker: str
    total_words: int = 0
    total_turns: int = 0
    unique_words: int = 0
    question_turns: int = 0
    interruption_turns: int = 0
    consecutive_turns: int = 0
    raw_avg_turn_length: float = 0.0
    raw_participation_rate: float = 0.0
    raw_verbosity_rate: float = 0.0
    raw_vocab_diversity: float = 0.0
    raw_question_rate: float = 0.0
    raw_interruption_rate: float = 0.0
    raw_consecutive_rate: float = 0.0
    # Normalized [0, 1] values keyed by axis name
    normalized: Dict[str, float] = field(default_factory=dict)

    @property
    def avg_turn_length(self) -> float:
        return self.normalized.get("avg_turn_length", 0.0)

    def raw_values(self) -> Dict[str, float]:
        return {
            "avg_turn_length": self.raw_avg_turn_length,
            "participation_rate": self.raw_participation_rate,
            "verbosity_rate": self.raw_verbosity_rate,
            "vocabulary_diversity": self.raw_vocab_diversity,
            "question_rate": self.raw_question_rate,
            "interruption_rate": self.raw_interruption_rate,
            "consecutive_rate": self.raw_consecutive_rate,
        }

    def to_dict(self) -> dict:
        return asdict(self)


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def compute_raw_fingerprints(
    turn_words: Sequence[DataPoint],
    counted_words: Sequence[DataPoint],
    enabled_speakers: Sequence[str],
    has_timing: bool = True,
) -> List[SpeakerFingerprint]:
    """
    Compute raw fingerprint values for the enabled speakers.

    Args:
        turn_words: Words used for turn structure (questions, interruptions,
            consecutive turns). Usually the revealed words without stop-word
            filtering so interrogatives are still seen.
        counted_words: Words used for word totals and vocabulary, with the
            stop-word filter already applied.
        enabled_speakers: Speakers to profile, in display order
        has_timing: Whether interruption detection is meaningful
    """
    enabled = list(enabled_speakers)
    enabled_set = set(enabled)
    fingerprints = {name: SpeakerFingerprint(speaker=name) for name in enabled}
    vocab: Dict[str, set] = {name: set() for name in enabled}

    total_words = 0
    for dp in counted_words:
        if dp.speaker not in enabled_set:
            continue
        total_words += 1
        fingerprints[dp.speaker].total_words += 1
        vocab[dp.speaker].add(normalize_word(dp.word))

    total_turns = 0
    for features in turn_features(turn_words, has_timing):
        speaker = features.turn.speaker
        if speaker not in enabled_set:
            continue
        total_turns += 1
        fp = fingerprints[speaker]
        fp.total_turns += 1
        fp.question_turns += int(features.is_question)
        fp.interruption_turns += int(features.is_interruption)
        fp.consecutive_turns += int(features.is_consecutive)

    result = []
    for name in enabled:
        fp = fingerprints[name]
        if fp.total_turns == 0 and fp.total_words == 0:
            continue
        fp.unique_words = len(vocab[name])
        fp.raw_avg_turn_length = _ratio(fp.total_words, fp.total_turns)
        fp.raw_participation_rate = _ratio(fp.total_turns, total_turns)
        fp.raw_verbosity_rate = _ratio(fp.total_words, total_words)
        fp.raw_vocab_diversity = _ratio(fp.unique_words, fp.total_words)
        fp.raw_question_rate = _ratio(fp.question_turns, fp.total_turns)
        fp.raw_interruption_rate = _ratio(fp.interruption_turns, fp.total_turns)
        fp.raw_consecutive_rate = _ratio(fp.consecutive_turns, fp.total_turns)
        result.append(fp)
    return result


def axis_maxima(fingerprints: Sequence[SpeakerFingerprint]) -> Dict[str, float]:
    maxima = {axis: 0.0 for axis in AXES}
    for fp in fingerprints:
        for axis, value in fp.raw_values().items():
            maxima[axis] = max(maxima[axis], value)
    return maxima


def normalize_fingerprints(
    fingerprints: List[SpeakerFingerprint], maxima: Optional[Dict[str, float]] = None
) -> List[SpeakerFingerprint]:
    """
    Fill ``normalized`` by dividing raw values by the reference maxima.

    With no maxima given, the maxima of ``fingerprints`` themselves are used,
    so the top speaker on each axis scores exactly 1.0. Values are clamped
    to [0, 1]; an axis whose maximum is 0 normalizes to 0.
    """
    reference = maxima if maxima is not None else axis_maxima(fingerprints)
    for fp in fingerprints:
        fp.normalized = {
            axis: min(1.0, _ratio(value, reference.get(axis, 0.0)))
            for axis, value in fp.raw_values().items()
        }
    return fingerprints


def compute_speaker_fingerprints(
    turn_words: Sequence[DataPoint],
    counted_words: Sequence[DataPoint],
    enabled_speakers: Sequence[str],
    has_timing: bool = True,
    reference_maxima: Optional[Dict[str, float]] = None,
) -> List[SpeakerFingerprint]:
    fingerprints = compute_raw_fingerprints(turn_words, counted_words, enabled_speakers, has_timing)
    return normalize_fingerprints(fingerprints, reference_maxima)
