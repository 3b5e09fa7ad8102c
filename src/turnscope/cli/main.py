"""
Main CLI entry point for turnscope.

Every analysis command loads one transcript file, reveals it (fully, or up
to ``--upto`` words), optionally restricts it to a time window, and prints
a rich table or, with ``--json``, a JSON document on stdout.
"""

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, List, Optional

import typer

from turnscope.cli.display_utils import (
    console,
    render_codes,
    render_fingerprints,
    render_journey,
    render_network,
    render_questions,
    render_stats,
    render_turns,
    show_summary,
)
from turnscope.cli.exit_codes import CliExit
from turnscope.core.analysis.engine import AnalyticsEngine
from turnscope.core.domain.transcript import TimeWindow, Transcript
from turnscope.core.utils.config import AnalysisConfig, TurnscopeConfig, get_config, load_config
from turnscope.core.utils.logger import get_logger, log_configuration_change, setup_logging
from turnscope.core.utils.time_utils import to_seconds
from turnscope.io.code_parser import load_code_file
from turnscope.io.text_parser import FORMAT_NAMES, get_format_description
from turnscope.io.transcript_loader import load_transcript
from turnscope.utils.error_handling import graceful_exit

logger = get_logger()

app = typer.Typer(
    name="turnscope",
    help="Turn-by-turn analysis of conversation transcripts",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to configuration file (JSON)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """
    Turnscope: parse transcripts and explore who speaks, repeats, asks and
    answers.
    """
    try:
        config = load_config(str(config_file)) if config_file else get_config()
    except ValueError as e:
        raise CliExit.config_error(f"Configuration error: {e}")

    previous_level = config.logging.level
    if log_level:
        config.logging.level = log_level.upper()
    setup_logging(config.logging.level, config.logging.file, config.logging.format)
    if config.logging.level != previous_level:
        log_configuration_change("logging.level", previous_level, config.logging.level)
    ctx.obj = config


# ============ Shared helpers ============


def _config(ctx: typer.Context) -> TurnscopeConfig:
    return ctx.obj if isinstance(ctx.obj, TurnscopeConfig) else get_config()


def _load(ctx: typer.Context, file: Path, fmt: Optional[str] = None, merge: bool = False) -> Transcript:
    config = _config(ctx)
    return load_transcript(file, timing=config.timing, force_format=fmt, merge_turns=merge)


def _window(start: Optional[str], end: Optional[str]) -> Optional[TimeWindow]:
    if start is None and end is None:
        return None
    left = to_seconds(start) if start is not None else 0.0
    right = to_seconds(end) if end is not None else float("inf")
    if left is None or right is None:
        raise CliExit.error(f"Invalid time window: {start or ''}..{end or ''}")
    if right < left:
        raise CliExit.error("Time window end is before its start")
    return TimeWindow(left, right)


def _engine(transcript: Transcript, analysis: AnalysisConfig, upto: Optional[int]) -> AnalyticsEngine:
    engine = AnalyticsEngine(transcript, analysis)
    if upto is None:
        engine.reveal_all()
    else:
        engine.set_end_index(upto)
    return engine


def _emit_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


UPTO_OPTION = typer.Option(None, "--upto", min=0, help="Reveal only the first N words")
START_OPTION = typer.Option(None, "--start", help="Window start (seconds or M:SS)")
END_OPTION = typer.Option(None, "--end", help="Window end (seconds or M:SS)")
JSON_OPTION = typer.Option(False, "--json", help="Print JSON instead of tables")
FORMAT_OPTION = typer.Option(
    None, "--format", "-f", help=f"Force a text line format ({', '.join(FORMAT_NAMES)})"
)


# ============ Commands ============


@app.command()
def parse(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file (.txt, .srt, .vtt, .csv)"),
    fmt: Optional[str] = FORMAT_OPTION,
    merge: bool = typer.Option(False, "--merge", help="Merge consecutive turns by the same speaker"),
    as_json: bool = JSON_OPTION,
) -> None:
    """Parse a transcript and list its turns."""
    with graceful_exit("parse"):
        transcript = _load(ctx, file, fmt, merge)
        turns = transcript.turns()
        if as_json:
            _emit_json(
                {
                    "source": transcript.source,
                    "timing_mode": transcript.timing_mode,
                    "speakers": transcript.speaker_names,
                    "turns": [
                        {
                            "turn_number": turn.turn_number,
                            "speaker": turn.speaker,
                            "start_time": turn.start_time,
                            "end_time": turn.end_time,
                            "content": turn.content,
                        }
                        for turn in turns
                    ],
                }
            )
            return
        show_summary(
            file.name,
            [
                f"Timing: {transcript.timing_mode}",
                f"Speakers: {', '.join(transcript.speaker_names) or '-'}",
                f"Turns: {len(turns)}  Words: {len(transcript)}",
            ],
        )
        render_turns(turns, transcript.has_timing)


@app.command()
def stats(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file"),
    upto: Optional[int] = UPTO_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show aggregate statistics for the revealed words."""
    with graceful_exit("stats"):
        config = _config(ctx)
        engine = _engine(_load(ctx, file), config.analysis, upto)
        result = engine.stats(_window(start, end))
        if as_json:
            _emit_json(result.to_dict())
        else:
            render_stats(result)


@app.command()
def fingerprints(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file"),
    full_scale: bool = typer.Option(
        False, "--full-scale", help="Normalize against the whole transcript instead of the selection"
    ),
    stop_words: bool = typer.Option(False, "--stop-words", help="Filter stop words from word counts"),
    upto: Optional[int] = UPTO_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show normalized speaker fingerprints."""
    with graceful_exit("fingerprints"):
        analysis = _config(ctx).analysis
        if full_scale:
            analysis = replace(analysis, scale_to_visible_data=False)
        if stop_words:
            analysis = replace(analysis, stop_words_filter=True)
        engine = _engine(_load(ctx, file), analysis, upto)
        result = engine.speaker_fingerprints(_window(start, end))
        if as_json:
            _emit_json([fp.to_dict() for fp in result])
        else:
            render_fingerprints(result)


@app.command()
def network(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file"),
    upto: Optional[int] = UPTO_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Show speaker-to-speaker turn transitions."""
    with graceful_exit("network"):
        config = _config(ctx)
        engine = _engine(_load(ctx, file), config.analysis, upto)
        result = engine.turn_network(_window(start, end))
        if as_json:
            _emit_json(result.to_dict())
        else:
            render_network(result)


@app.command()
def questions(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file"),
    upto: Optional[int] = UPTO_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Pair question turns with the answer that follows."""
    with graceful_exit("questions"):
        config = _config(ctx)
        engine = _engine(_load(ctx, file), config.analysis, upto)
        result = engine.question_answer_pairs(_window(start, end))
        if as_json:
            _emit_json([pair.to_dict() for pair in result])
        else:
            render_questions(result)


@app.command()
def journey(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Transcript file"),
    word: str = typer.Argument(..., help="Word to follow through the conversation"),
    upto: Optional[int] = UPTO_OPTION,
    start: Optional[str] = START_OPTION,
    end: Optional[str] = END_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Follow one word through the conversation."""
    with graceful_exit("journey"):
        config = _config(ctx)
        engine = _engine(_load(ctx, file), config.analysis, upto)
        result = engine.word_journey(word, _window(start, end))
        if as_json:
            _emit_json(
                {
                    "word": result.word,
                    "speakers": result.speakers(),
                    "occurrences": [
                        {
                            "speaker": occurrence.speaker,
                            "turn_number": occurrence.data_point.turn_number,
                            "start_time": occurrence.data_point.start_time,
                            "word": occurrence.data_point.display_word,
                            "is_first": occurrence.is_first,
                            "is_first_by_speaker": occurrence.is_first_by_speaker,
                        }
                        for occurrence in result.occurrences
                    ],
                }
            )
        else:
            render_journey(result)


@app.command()
def codes(
    ctx: typer.Context,
    transcript_file: Path = typer.Argument(..., help="Transcript file"),
    code_files: List[Path] = typer.Argument(..., help="One or more code files (.csv)"),
    as_json: bool = JSON_OPTION,
) -> None:
    """Apply code files to a transcript and summarize coded words."""
    with graceful_exit("codes"):
        transcript = _load(ctx, transcript_file)
        for code_file in code_files:
            load_code_file(transcript, code_file)

        counts: dict = {}
        for dp in transcript.words:
            for code in dp.codes:
                counts[code] = counts.get(code, 0) + 1
        entries = list(transcript.codes.entries)

        if as_json:
            _emit_json(
                [
                    {"code": entry.code, "color": entry.color, "words": counts.get(entry.code, 0)}
                    for entry in entries
                ]
            )
        elif not entries:
            console.print("[yellow]No codes found.[/yellow]")
        else:
            render_codes(entries, counts)


@app.command()
def formats() -> None:
    """List the line formats the text parser recognizes."""
    for name in FORMAT_NAMES:
        console.print(f"[cyan]{name}[/cyan]: {get_format_description(name)}")


if __name__ == "__main__":
    app()
