"""
turnscope - Conversation transcript parsing and turn-taking analytics

turnscope ingests loosely structured conversation transcripts (pasted text in
several ad-hoc line formats, CSV tables, SRT/VTT subtitles), normalizes them
into a per-word data model and derives conversational analytics from it.

Package Structure:
- io/: Parsers for free text, subtitles, tables and annotation (code) files
- core/domain/: DataPoint, Transcript and the other value types
- core/analysis/: Analytics engine (repeat counting, fingerprints, Q/A pairs,
  word journeys, turn-taking networks, statistics)
- core/utils/: Configuration, logging and timestamp helpers
- utils/: Text helpers and error handling
- cli/: Typer command-line interface
"""

__version__ = "0.3.0"
