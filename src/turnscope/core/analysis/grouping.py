"""
Grouping and ordering views of the processed word stream.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from turnscope.core.domain.data_point import DataPoint

UNKNOWN_SPEAKER_RANK = 999


def group_by_speaker(words: Sequence[DataPoint]) -> Dict[str, List[DataPoint]]:
    groups: Dict[str, List[DataPoint]] = {}
    for dp in words:
        groups.setdefault(dp.speaker, []).append(dp)
    return groups


def group_by_turn(words: Sequence[DataPoint]) -> Dict[int, List[DataPoint]]:
    groups: Dict[int, List[DataPoint]] = {}
    for dp in words:
        groups.setdefault(dp.turn_number, []).append(dp)
    return groups


def sort_speaker_groups(
    groups: Dict[str, List[DataPoint]],
    mode: str = "none",
    speaker_order: Optional[Sequence[str]] = None,
) -> List[Tuple[str, List[DataPoint]]]:
    """
    Order speaker groups for display.

    ``none`` follows ``speaker_order`` (unknown speakers last), ``words``
    and ``turns`` sort by volume descending, ``name`` sorts alphabetically.
    """
    rank = {name: index for index, name in enumerate(speaker_order or [])}
    items = sorted(groups.items(), key=lambda item: rank.get(item[0], UNKNOWN_SPEAKER_RANK))

    if mode == "words":
        items.sort(key=lambda item: len(item[1]), reverse=True)
    elif mode == "turns":
        items.sort(key=lambda item: len({dp.turn_number for dp in item[1]}), reverse=True)
    elif mode == "name":
        items.sort(key=lambda item: item[0])
    return items


def sort_for_cloud(
    words: Sequence[DataPoint],
    sort_by_count: bool = False,
    separate_speakers: bool = False,
    speaker_order: Optional[Sequence[str]] = None,
) -> List[DataPoint]:
    """
    Order words for the contribution cloud.

    Sorting by count is applied first; separating by speaker then groups the
    words by roster position while keeping the count order inside a group.
    """
    ordered = list(words)
    if sort_by_count:
        ordered.sort(key=lambda dp: dp.count, reverse=True)
    if separate_speakers:
        rank = {name: index for index, name in enumerate(speaker_order or [])}
        ordered.sort(key=lambda dp: rank.get(dp.speaker, UNKNOWN_SPEAKER_RANK))
    return ordered
