"""
Annotation ("code") file detection, parsing and application.

A code file labels parts of a transcript with qualitative codes, in one of
three layouts:

- Turn-based:  ``code, turn``
- Turn range:  ``code, turn_start, turn_end``
- Time-based:  ``start, end`` with an optional ``code`` column; without it
  the whole file is one code named after the file

Bad rows are skipped; a table matching none of the layouts raises
CodeFileFormatError.
"""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from turnscope.core.domain.codes import CodeEntry, ParsedCodes
from turnscope.core.domain.data_point import DataPoint
from turnscope.core.domain.transcript import Transcript
from turnscope.core.utils.config.base import MAX_TURN_RANGE
from turnscope.core.utils.logger import get_logger, log_info, log_warning
from turnscope.core.utils.time_utils import to_seconds
from turnscope.io.tabular import TableData, read_table
from turnscope.utils.error_handling import CodeFileFormatError

logger = get_logger()

CODE_RELATED_COLUMNS = ("code", "turn", "turn_start", "turn_end")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def _has(fields: Sequence[str], *names: str) -> bool:
    return all(name in fields for name in names)


# ============ Detection ============


def is_code_file(table: TableData) -> bool:
    """
    Decide whether a table is a code file rather than a transcript.

    Tables with both ``speaker`` and ``content`` are transcripts. Tables that
    have a code-related column but no complete layout still count, so the
    caller can report the format problem instead of treating them as
    transcripts.
    """
    fields = table.fields
    if not fields or not table.rows:
        return False
    if _has(fields, "speaker", "content"):
        return False
    if _has(fields, "turn", "code"):
        return True
    if _has(fields, "turn_start", "turn_end", "code"):
        return True
    if _has(fields, "start", "end"):
        return True
    return any(column in fields for column in CODE_RELATED_COLUMNS)


def get_code_format_label(fields: Sequence[str]) -> str:
    if _has(fields, "turn", "code"):
        return "Turn-based"
    if _has(fields, "turn_start", "turn_end", "code"):
        return "Turn range"
    if _has(fields, "start", "end"):
        return "Time-based"
    return "Unknown"


def code_name_from_file_name(file_name: str) -> str:
    """``"off_topic-talk.csv"`` -> ``"off topic talk"``."""
    base = Path(file_name).name
    return re.sub(r"[_-]", " ", _EXTENSION_RE.sub("", base))


def extract_code_names(rows: Iterable[Dict[str, str]], fields: Sequence[str], file_name: str) -> List[str]:
    """Distinct code names in file order, or the file-derived name."""
    if "code" not in fields:
        return [code_name_from_file_name(file_name)]
    names: List[str] = []
    for row in rows:
        name = str(row.get("code", "") or "").strip()
        if name and name not in names:
            names.append(name)
    return names


# ============ Parsing ============


def _parse_turn_number(value) -> Optional[int]:
    """Positive integral turn number, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(number) or number < 1 or not number.is_integer():
        return None
    return int(number)


def _freeze(code_turns: Dict[str, Set[int]]) -> Dict[str, Tuple[int, ...]]:
    return {code: tuple(sorted(turns)) for code, turns in code_turns.items()}


def _parse_turn_rows(rows: Iterable[Dict[str, str]]) -> ParsedCodes:
    code_turns: Dict[str, Set[int]] = {}
    skipped = 0
    for row in rows:
        code = str(row.get("code", "") or "").strip()
        turn = _parse_turn_number(row.get("turn"))
        if not code or turn is None:
            skipped += 1
            continue
        code_turns.setdefault(code, set()).add(turn)
    if skipped:
        logger.debug(f"Skipped {skipped} turn-based code rows")
    return ParsedCodes(kind="turn", turns=_freeze(code_turns))


def _parse_turn_range_rows(rows: Iterable[Dict[str, str]]) -> ParsedCodes:
    code_turns: Dict[str, Set[int]] = {}
    for row in rows:
        code = str(row.get("code", "") or "").strip()
        start_turn = _parse_turn_number(row.get("turn_start"))
        end_turn = _parse_turn_number(row.get("turn_end"))
        if not code or start_turn is None or end_turn is None or end_turn < start_turn:
            continue
        span = end_turn - start_turn + 1
        if span > MAX_TURN_RANGE:
            log_warning(
                "codes",
                f"Turn range too large ({span} turns) for code '{code}', skipping",
            )
            continue
        code_turns.setdefault(code, set()).update(range(start_turn, end_turn + 1))
    return ParsedCodes(kind="turn", turns=_freeze(code_turns))


def _parse_time_rows(
    rows: Iterable[Dict[str, str]], has_code_column: bool, file_name: str
) -> ParsedCodes:
    file_code = "" if has_code_column else code_name_from_file_name(file_name)
    intervals: List[Tuple[str, float, float]] = []
    for row in rows:
        start = to_seconds(row.get("start"))
        end = to_seconds(row.get("end"))
        if start is None or end is None:
            continue
        code = str(row.get("code", "") or "").strip() if has_code_column else file_code
        if not code:
            continue
        intervals.append((code, start, end))
    return ParsedCodes(kind="time", intervals=tuple(intervals))


def parse_code_file(table: TableData, file_name: str = "") -> ParsedCodes:
    """
    Parse an annotation table.

    Raises:
        CodeFileFormatError: If the columns match no known layout
    """
    fields = table.fields
    if _has(fields, "turn", "code"):
        return _parse_turn_rows(table.rows)
    if _has(fields, "turn_start", "turn_end", "code"):
        return _parse_turn_range_rows(table.rows)
    if _has(fields, "start", "end"):
        return _parse_time_rows(table.rows, "code" in fields, file_name)
    raise CodeFileFormatError(fields=fields)


# ============ Application ============


def apply_codes_by_turn(words: Sequence[DataPoint], parsed: ParsedCodes) -> List[DataPoint]:
    """Union each word's codes with the codes covering its turn number."""
    if parsed.kind != "turn":
        return list(words)

    turn_to_codes: Dict[int, Set[str]] = {}
    for code, turns in parsed.turns.items():
        for turn in turns:
            turn_to_codes.setdefault(turn, set()).add(code)

    result = []
    for dp in words:
        codes = turn_to_codes.get(dp.turn_number)
        result.append(dp.copy_with(codes=dp.codes | codes) if codes else dp)
    return result


def apply_codes_by_time(words: Sequence[DataPoint], parsed: ParsedCodes) -> List[DataPoint]:
    """
    Add each code whose interval overlaps a word's time span.

    Overlap is strict: a word ending exactly where a code starts is not
    coded.
    """
    if parsed.kind != "time":
        return list(words)

    result = []
    for dp in words:
        matching = {
            code
            for code, start, end in parsed.intervals
            if dp.start_time < end and dp.end_time > start
        }
        result.append(dp.copy_with(codes=dp.codes | matching) if matching else dp)
    return result


def apply_codes(words: Sequence[DataPoint], parsed: ParsedCodes) -> List[DataPoint]:
    if parsed.kind == "turn":
        return apply_codes_by_turn(words, parsed)
    return apply_codes_by_time(words, parsed)


def load_code_file(transcript: Transcript, path: str | Path) -> List[CodeEntry]:
    """
    Read, parse and apply a code file to a transcript.

    Returns the registry entries created for codes not seen before.

    Raises:
        CodeFileFormatError: If the file is not a recognizable code file
    """
    path = Path(path)
    table = read_table(path)
    if not is_code_file(table):
        raise CodeFileFormatError("Not a code file", fields=table.fields)

    parsed = parse_code_file(table, path.name)
    transcript.replace_words(apply_codes(transcript.words, parsed))
    added = transcript.codes.add_new_codes(parsed.code_names)
    log_info(
        "codes",
        f"Applied {len(parsed.code_names)} codes from {path.name}",
        context=get_code_format_label(table.fields),
    )
    return added
