"""
Map the columns of an uploaded table onto the transcript columns.

Exact header matches are taken first; remaining expected columns are then
matched fuzzily (best score first, each source column used at most once).
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Dict, List, Mapping, Optional

from turnscope.core.utils.config.base import COLUMN_MATCH_THRESHOLD

REQUIRED_COLUMNS = ["speaker", "content"]
OPTIONAL_COLUMNS = ["start", "end"]
TRANSCRIPT_COLUMNS = REQUIRED_COLUMNS + OPTIONAL_COLUMNS


@dataclass
class ColumnMatch:
    expected: str
    matched: Optional[str] = None
    is_exact: bool = False
    score: float = 0.0


def similarity(a: str, b: str) -> float:
    """Similarity ratio in [0, 1] between two header names."""
    if not a and not b:
        return 1.0
    return SequenceMatcher(None, a, b).ratio()


def map_columns(
    columns: List[str], threshold: float = COLUMN_MATCH_THRESHOLD
) -> List[ColumnMatch]:
    """
    Match expected transcript columns against the table's headers.

    Returns one ColumnMatch per expected column, required columns first.
    """
    candidates = [column for column in columns if column and column.strip()]
    used: set[str] = set()
    results: List[ColumnMatch] = []

    for expected in TRANSCRIPT_COLUMNS:
        if expected in candidates and expected not in used:
            used.add(expected)
            results.append(ColumnMatch(expected, expected, True, 1.0))
        else:
            results.append(ColumnMatch(expected))

    fuzzy_pairs = []
    for index, match in enumerate(results):
        if match.matched is not None:
            continue
        for column in candidates:
            if column in used:
                continue
            score = similarity(match.expected, column.strip().lower())
            if score >= threshold:
                fuzzy_pairs.append((score, index, column))

    # Stable sort keeps expected-column order among equal scores
    fuzzy_pairs.sort(key=lambda pair: pair[0], reverse=True)
    for score, index, column in fuzzy_pairs:
        if results[index].matched is not None or column in used:
            continue
        used.add(column)
        results[index].matched = column
        results[index].score = score

    return results


def is_required(column: str) -> bool:
    return column in REQUIRED_COLUMNS


def all_required_mapped(
    matches: List[ColumnMatch], overrides: Optional[Mapping[str, Optional[str]]] = None
) -> bool:
    """True when every required column has a source, counting user overrides."""
    overrides = overrides or {}
    by_expected = {match.expected: match for match in matches}
    for column in REQUIRED_COLUMNS:
        if column in overrides:
            if overrides[column] is None:
                return False
            continue
        match = by_expected.get(column)
        if match is None or match.matched is None:
            return False
    return True


def build_final_mapping(
    matches: List[ColumnMatch], overrides: Optional[Mapping[str, Optional[str]]] = None
) -> Dict[str, str]:
    """expected column -> source column, with overrides taking precedence."""
    overrides = overrides or {}
    mapping: Dict[str, str] = {}
    for match in matches:
        source = overrides[match.expected] if match.expected in overrides else match.matched
        if source:
            mapping[match.expected] = source
    return mapping


def remap_rows(rows: List[Dict[str, str]], mapping: Mapping[str, str]) -> List[Dict[str, str]]:
    return [
        {expected: row.get(source, "") for expected, source in mapping.items()}
        for row in rows
    ]
