"""
Rich rendering for CLI output.
"""

from typing import List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from turnscope.core.analysis.fingerprints import AXES, SpeakerFingerprint
from turnscope.core.analysis.qa_pairs import QuestionAnswerPair
from turnscope.core.analysis.stats import TranscriptStats
from turnscope.core.analysis.turn_network import NetworkData
from turnscope.core.analysis.word_journey import WordJourney
from turnscope.core.domain.codes import CodeEntry
from turnscope.core.domain.data_point import Turn
from turnscope.core.utils.time_utils import format_time

console = Console()

MAX_CONTENT_WIDTH = 60


def _clip(text: str, width: int = MAX_CONTENT_WIDTH) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


def show_summary(title: str, lines: Sequence[str]) -> None:
    console.print(Panel("\n".join(lines), title=title, expand=False))


def render_turns(turns: List[Turn], has_timing: bool) -> None:
    table = Table(title="Turns")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Speaker", style="cyan")
    if has_timing:
        table.add_column("Start", style="green")
    table.add_column("Words", justify="right", style="magenta")
    table.add_column("Content")

    for turn in turns:
        row = [str(turn.turn_number), turn.speaker]
        if has_timing:
            row.append(format_time(turn.start_time))
        row.extend([str(turn.word_count), _clip(turn.content)])
        table.add_row(*row)
    console.print(table)


def render_stats(stats: TranscriptStats) -> None:
    table = Table(title="Transcript Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in stats.to_dict().items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)


def render_fingerprints(fingerprints: List[SpeakerFingerprint]) -> None:
    if not fingerprints:
        console.print("[yellow]No speakers in the current selection.[/yellow]")
        return
    table = Table(title="Speaker Fingerprints")
    table.add_column("Speaker", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Turns", justify="right")
    for axis in AXES:
        table.add_column(axis.replace("_", " "), justify="right")
    for fp in fingerprints:
        table.add_row(
            fp.speaker,
            str(fp.total_words),
            str(fp.total_turns),
            *[f"{fp.normalized.get(axis, 0.0):.2f}" for axis in AXES],
        )
    console.print(table)


def render_network(network: NetworkData) -> None:
    table = Table(title="Turn-Taking Network")
    table.add_column("From", style="cyan")
    table.add_column("To", style="green")
    table.add_column("Transitions", justify="right", style="magenta")
    table.add_column("Words", justify="right")
    for source, target, count, word_count in network.edges():
        table.add_row(source, target, str(count), str(word_count))
    console.print(table)


def render_questions(pairs: List[QuestionAnswerPair]) -> None:
    if not pairs:
        console.print("[yellow]No questions detected in transcript.[/yellow]")
        return
    table = Table(title="Questions and Answers")
    table.add_column("Asker", style="cyan")
    table.add_column("Question")
    table.add_column("Answerer", style="green")
    table.add_column("Answer")
    for pair in pairs:
        table.add_row(
            pair.question_speaker,
            _clip(pair.question_content, 40),
            pair.answer_speaker or "-",
            _clip(pair.answer_content or "", 40),
        )
    console.print(table)


def render_journey(journey: WordJourney) -> None:
    if not journey.occurrences:
        console.print(f"[yellow]No occurrences of '{journey.word}'.[/yellow]")
        return
    table = Table(title=f"Word Journey: {journey.word}")
    table.add_column("Time", style="green")
    table.add_column("Speaker", style="cyan")
    table.add_column("Turn", justify="right")
    table.add_column("Word")
    table.add_column("First", style="magenta")
    for occurrence in journey.occurrences:
        dp = occurrence.data_point
        marker = "overall" if occurrence.is_first else ("speaker" if occurrence.is_first_by_speaker else "")
        table.add_row(format_time(dp.start_time), occurrence.speaker, str(dp.turn_number), dp.display_word, marker)
    console.print(table)


def render_codes(entries: List[CodeEntry], counts: dict) -> None:
    table = Table(title="Codes")
    table.add_column("Code", style="cyan")
    table.add_column("Color")
    table.add_column("Words", justify="right", style="magenta")
    for entry in entries:
        table.add_row(entry.code, f"[{entry.color}]{entry.color}[/]", str(counts.get(entry.code, 0)))
    console.print(table)
