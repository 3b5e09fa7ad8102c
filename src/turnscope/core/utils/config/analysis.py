"""Analysis and timing configuration classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .base import SPEAKER_SORT_OPTIONS


@dataclass
class AnalysisConfig:
    """
    Switches that shape the processed word stream and its derived views.

    These correspond to the toggles a user flips in the visualization layer.
    Every analytics entry point receives an instance explicitly.
    """

    stop_words_filter: bool = False
    last_word_mode: bool = False
    echo_words: bool = False
    sort_by_count: bool = False
    separate_speakers: bool = False
    # 'none' keeps roster order; 'words'/'turns' sort descending; 'name' A-Z
    speaker_sort: str = "none"
    # Normalize fingerprints against the visible selection instead of the
    # whole transcript
    scale_to_visible_data: bool = True
    word_to_search: Optional[str] = None
    speaker_order: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if self.speaker_sort not in SPEAKER_SORT_OPTIONS:
            raise ValueError(
                f"speaker_sort must be one of {', '.join(SPEAKER_SORT_OPTIONS)}, "
                f"got {self.speaker_sort!r}"
            )

    def cache_key(self) -> tuple:
        """Fields that influence analytics results, for result caching."""
        return (
            self.stop_words_filter,
            self.last_word_mode,
            self.echo_words,
            self.sort_by_count,
            self.separate_speakers,
            self.speaker_sort,
            self.scale_to_visible_data,
            self.word_to_search,
            tuple(self.speaker_order),
        )


@dataclass
class TimingConfig:
    """Settings used when turn end times must be estimated."""

    preserve_gaps_between_turns: bool = False
    speech_rate_words_per_second: float = 3.0

    def validate(self) -> None:
        if self.speech_rate_words_per_second <= 0:
            raise ValueError("speech_rate_words_per_second must be positive")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    file: Optional[str] = None
    format: Optional[str] = None

    def validate(self) -> None:
        if self.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {self.level}")
