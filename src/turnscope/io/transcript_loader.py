"""
Load a transcript from a file, choosing the parser by extension.

- ``.txt``: line pattern matcher
- ``.srt`` / ``.vtt``: subtitle parser
- ``.csv``: tabular reader (with fuzzy column mapping)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from turnscope.core.domain.transcript import Transcript
from turnscope.core.utils.config.analysis import TimingConfig
from turnscope.core.utils.logger import get_logger, log_debug, log_file_operation
from turnscope.io.subtitle_parser import parse_subtitle_text
from turnscope.io.tabular import normalize_transcript_table, parse_csv_rows, read_table
from turnscope.io.text_parser import merge_same_speaker_turns, parse_transcript_text
from turnscope.io.transcript_factory import (
    create_transcript_from_parsed_text,
    create_transcript_from_subtitle,
)
from turnscope.utils.error_handling import TranscriptFormatError

logger = get_logger()

TEXT_EXTENSIONS = (".txt", ".text", ".md")
SUBTITLE_EXTENSIONS = (".srt", ".vtt")
TABLE_EXTENSIONS = (".csv",)


def load_transcript(
    path: str | Path,
    timing: Optional[TimingConfig] = None,
    force_format: Optional[str] = None,
    merge_turns: bool = False,
) -> Transcript:
    """
    Load and normalize a transcript file.

    Args:
        path: Transcript file
        timing: Timing settings used to estimate missing end times
        force_format: Line format override for text files
        merge_turns: Fold consecutive same-speaker turns (text files)

    Raises:
        FileNotFoundError: If the file does not exist
        TranscriptFormatError: If the extension or table layout is unsupported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")

    suffix = path.suffix.lower()
    timing = timing or TimingConfig()

    if suffix in SUBTITLE_EXTENSIONS:
        result = parse_subtitle_text(path.read_text(encoding="utf-8"))
        transcript = create_transcript_from_subtitle(result, source=str(path))
    elif suffix in TABLE_EXTENSIONS:
        table = normalize_transcript_table(read_table(path))
        if table is None:
            raise TranscriptFormatError(
                f"{path.name}: could not find speaker and content columns"
            )
        result = parse_csv_rows(table.rows, timing.speech_rate_words_per_second)
        transcript = create_transcript_from_parsed_text(result, timing, source=str(path))
    elif suffix in TEXT_EXTENSIONS:
        result = parse_transcript_text(path.read_text(encoding="utf-8"), force_format)
        if merge_turns:
            result = merge_same_speaker_turns(result)
        transcript = create_transcript_from_parsed_text(result, timing, source=str(path))
    else:
        raise TranscriptFormatError(f"Unsupported transcript file type: {path.suffix or path.name}")

    log_file_operation("load", str(path), True)
    log_debug("loader", f"{len(transcript)} words, {len(transcript.speaker_names)} speakers", context=transcript.timing_mode)
    return transcript
