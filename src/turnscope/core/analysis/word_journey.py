"""Word journey: every occurrence of a search term over time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from turnscope.core.domain.data_point import DataPoint
from turnscope.utils.text_utils import normalize_word


@dataclass(frozen=True)
class WordOccurrence:
    data_point: DataPoint
    speaker: str
    is_first: bool = False
    is_first_by_speaker: bool = False


@dataclass
class WordJourney:
    word: str
    occurrences: List[WordOccurrence] = field(default_factory=list)

    def speakers(self) -> List[str]:
        names: List[str] = []
        for occurrence in self.occurrences:
            if occurrence.speaker not in names:
                names.append(occurrence.speaker)
        return names


def word_journey(
    words: Sequence[DataPoint], term: str, enabled_speakers: Sequence[str]
) -> WordJourney:
    """
    Collect occurrences of ``term`` (substring match on normalized words).

    Occurrences are sorted by start time; ties keep transcript order. The
    earliest occurrence overall and the earliest per speaker are flagged.
    """
    needle = normalize_word(term or "")
    if not needle:
        return WordJourney(word=term or "")

    enabled = set(enabled_speakers)
    matches = [
        dp for dp in words
        if dp.speaker in enabled and needle in normalize_word(dp.word)
    ]
    matches.sort(key=lambda dp: dp.start_time)

    occurrences: List[WordOccurrence] = []
    seen_speakers = set()
    for index, dp in enumerate(matches):
        first_for_speaker = dp.speaker not in seen_speakers
        seen_speakers.add(dp.speaker)
        occurrences.append(
            WordOccurrence(
                data_point=dp,
                speaker=dp.speaker,
                is_first=index == 0,
                is_first_by_speaker=first_for_speaker,
            )
        )
    return WordJourney(word=term, occurrences=occurrences)
