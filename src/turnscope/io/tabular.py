"""
CSV reading and transcript-table parsing.

Tables are read with pandas as strings, headers are trimmed and lower-cased,
and rows come back as plain dicts so the code-file parser and the transcript
row parser can share them.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from turnscope.core.domain.parse_result import ParsedTurn, ParseResult
from turnscope.core.utils.logger import get_logger, log_file_operation
from turnscope.core.utils.time_utils import to_seconds
from turnscope.io.column_mapper import all_required_mapped, build_final_mapping, map_columns, remap_rows
from turnscope.io.timing import estimate_duration
from turnscope.utils.text_utils import normalize_speaker_name, split_into_word_tokens

logger = get_logger()


@dataclass
class TableData:
    fields: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)


def _frame_to_table(frame: pd.DataFrame) -> TableData:
    frame = frame.rename(columns=lambda column: str(column).strip().lower())
    frame = frame.fillna("")
    if frame.empty:
        return TableData(fields=list(frame.columns), rows=[])
    # Drop rows where every cell is blank
    blank = frame.astype(str).apply(lambda column: column.str.strip() == "").all(axis=1)
    frame = frame[~blank]
    return TableData(fields=list(frame.columns), rows=frame.to_dict(orient="records"))


def read_table_text(text: str) -> TableData:
    """Parse CSV text already in memory."""
    if not text or not text.strip():
        return TableData()
    frame = pd.read_csv(
        io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True
    )
    return _frame_to_table(frame)


def read_table(path: str | Path) -> TableData:
    """
    Read a CSV file into a TableData.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Table file not found: {path}")
    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        log_file_operation("read", str(path), True)
        return TableData()
    table = _frame_to_table(frame)
    log_file_operation("read", str(path), True)
    return table


def has_speaker_and_content(row: Dict[str, str]) -> bool:
    speaker = str(row.get("speaker", "") or "").strip()
    content = str(row.get("content", "") or "").strip()
    return bool(speaker) and bool(content)


def is_transcript_table(table: TableData) -> bool:
    """A table is a transcript when it has speaker/content and one usable row."""
    if "speaker" not in table.fields or "content" not in table.fields:
        return False
    return any(has_speaker_and_content(row) for row in table.rows)


def normalize_transcript_table(table: TableData) -> Optional[TableData]:
    """
    Rename fuzzy-matched headers ("Speaker Name", "text", ...) to the
    transcript columns. Returns None when required columns cannot be found.
    """
    matches = map_columns(table.fields)
    if not all_required_mapped(matches):
        return None
    mapping = build_final_mapping(matches)
    return TableData(fields=list(mapping), rows=remap_rows(table.rows, mapping))


def _row_start_time(row: Dict[str, str]) -> Optional[float]:
    if not has_speaker_and_content(row):
        return None
    return to_seconds(row.get("start"))


def parse_csv_rows(rows: List[Dict[str, str]], speech_rate: float = 3.0) -> ParseResult:
    """
    Turn transcript rows into a ParseResult, one turn per usable row.

    A transcript stays untimed until the first row carrying a time. After
    that, a missing start is taken from the previous row's end, and a
    missing or non-increasing end comes from the next row's start or from
    a word-count estimate.
    """
    turns: List[ParsedTurn] = []
    speakers: List[str] = []
    rows_with_start = 0
    rows_with_end = 0
    last_start: Optional[float] = None
    last_end: Optional[float] = None

    for index, row in enumerate(rows):
        if not has_speaker_and_content(row):
            continue

        speaker = normalize_speaker_name(str(row["speaker"]))
        content = str(row["content"]).strip()
        words = split_into_word_tokens(content)
        if not words:
            continue

        if speaker not in speakers:
            speakers.append(speaker)

        current_start = to_seconds(row.get("start"))
        current_end = to_seconds(row.get("end"))
        if current_start is not None:
            rows_with_start += 1
        if current_end is not None:
            rows_with_end += 1

        start_time: Optional[float] = None
        end_time: Optional[float] = None
        untimed = (
            current_start is None
            and current_end is None
            and last_start is None
            and last_end is None
        )

        if not untimed:
            if current_start is not None:
                start_time = current_start
            elif last_end is not None:
                start_time = last_end
            elif last_start is not None:
                start_time = last_start
            else:
                start_time = 0.0

            if current_end is not None:
                end_time = current_end
            else:
                next_start = _row_start_time(rows[index + 1]) if index + 1 < len(rows) else None
                if next_start is not None and next_start > start_time:
                    end_time = next_start
                else:
                    end_time = start_time + estimate_duration(len(words), speech_rate)

            if end_time <= start_time:
                end_time = start_time + estimate_duration(len(words), speech_rate)

            last_start = start_time
            last_end = end_time

        turns.append(ParsedTurn(speaker=speaker, content=content, start_time=start_time, end_time=end_time))

    if not turns:
        timing_mode = "untimed"
    elif rows_with_end >= len(turns) * 0.5:
        timing_mode = "startEnd"
    elif rows_with_start > 0:
        timing_mode = "startOnly"
    else:
        timing_mode = "untimed"

    has_timestamps = rows_with_start > 0 or rows_with_end > 0
    skipped = len(rows) - len(turns)
    if skipped:
        logger.warning(f"Skipped {skipped} transcript rows without speaker or content")

    return ParseResult(
        turns=turns,
        detected_format="timestamped" if has_timestamps else "colon",
        has_timestamps=has_timestamps,
        speakers=speakers,
        continuation_line_count=0,
        total_line_count=len(rows),
        timing_mode=timing_mode,
    )
