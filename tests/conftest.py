"""
Shared pytest fixtures and configuration for turnscope tests.

This module provides sample transcripts (as text and as files), small
builders for word arrays, and resets the global config and logger between
tests.
"""

import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

# Put `src/` first so `import turnscope` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from turnscope.core.domain.data_point import DataPoint  # noqa: E402
from turnscope.core.domain.parse_result import ParsedTurn, ParseResult  # noqa: E402
from turnscope.core.domain.transcript import Transcript  # noqa: E402
from turnscope.core.utils.config import set_config  # noqa: E402
from turnscope.core.utils.logger import reset_logging  # noqa: E402
from turnscope.io.transcript_factory import create_transcript_from_parsed_text  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# Transcript Data Fixtures
# ============================================================================

@pytest.fixture
def colon_transcript_text() -> str:
    """Untimed interview in Speaker: content form."""
    return (
        "Alice: What do you think about the budget?\n"
        "Bob: The budget is tight but workable.\n"
        "Bob: We can cut travel.\n"
        "Alice: Travel is important though.\n"
        "Carol: I agree with Alice about travel.\n"
    )


@pytest.fixture
def timestamped_transcript_text() -> str:
    """Bracketed-timestamp transcript where Bob talks over Alice."""
    return (
        "[0:00] Alice: Hello everyone and welcome.\n"
        "[0:10] Bob: Thanks for having me here.\n"
        "[0:20] Alice: Shall we start with the budget?\n"
        "[0:30] Bob: Yes the budget first.\n"
    )


@pytest.fixture
def transcripts_dir() -> Path:
    return FIXTURES_DIR / "transcripts"


@pytest.fixture
def subtitles_dir() -> Path:
    return FIXTURES_DIR / "subtitles"


@pytest.fixture
def codes_dir() -> Path:
    return FIXTURES_DIR / "codes"


# ============================================================================
# Builders
# ============================================================================

TurnSpec = Tuple[str, str, Optional[float], Optional[float]]


@pytest.fixture
def make_transcript():
    """
    Build a Transcript from (speaker, content, start, end) tuples.

    Passing no times gives an untimed transcript; passing only starts gives
    a start-only one; passing starts and ends gives start/end timing.
    """

    def _make(turns: Sequence[TurnSpec], timing_mode: Optional[str] = None) -> Transcript:
        parsed = [ParsedTurn(speaker, content, start, end) for speaker, content, start, end in turns]
        has_timestamps = any(turn.start_time is not None for turn in parsed)
        if timing_mode is None and has_timestamps:
            has_ends = all(turn.end_time is not None for turn in parsed)
            timing_mode = "startEnd" if has_ends else "startOnly"
        speakers: List[str] = []
        for turn in parsed:
            if turn.speaker not in speakers:
                speakers.append(turn.speaker)
        result = ParseResult(
            turns=parsed,
            detected_format="timestamped" if has_timestamps else "colon",
            has_timestamps=has_timestamps,
            speakers=speakers,
            timing_mode=timing_mode,
        )
        return create_transcript_from_parsed_text(result)

    return _make


@pytest.fixture
def make_words():
    """Build DataPoints from (speaker, turn_number, word) tuples with positional times."""

    def _make(items: Sequence[Tuple[str, int, str]]) -> List[DataPoint]:
        return [
            DataPoint(speaker=speaker, turn_number=turn, word=word, start_time=float(i), end_time=float(i + 1))
            for i, (speaker, turn, word) in enumerate(items)
        ]

    return _make


# ============================================================================
# CLI Fixtures
# ============================================================================

@pytest.fixture
def typer_test_client():
    """Typer test client for CLI testing."""
    from typer.testing import CliRunner

    return CliRunner()


# ============================================================================
# Global State Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def reset_global_state(monkeypatch):
    """Start every test with default config, a fresh logger and no TURNSCOPE_* env vars."""
    import os

    for key in list(os.environ):
        if key.startswith("TURNSCOPE_"):
            monkeypatch.delenv(key, raising=False)
    set_config(None)
    reset_logging()
    yield
    set_config(None)
    reset_logging()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual functions/classes")
    config.addinivalue_line("markers", "integration: Tests that load files or drive the CLI end to end")
