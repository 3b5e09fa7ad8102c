"""
Domain objects for turnscope.

DataPoint (one per spoken word) is the atomic unit; turns are derived from
runs of DataPoints sharing a turn number. Parsers produce ParseResult values
that the transcript factory turns into a Transcript.
"""

from turnscope.core.domain.codes import CodeEntry, CodeRegistry, ParsedCodes
from turnscope.core.domain.data_point import DataPoint, Turn, turns_from_words
from turnscope.core.domain.parse_result import ParsedTurn, ParseResult
from turnscope.core.domain.transcript import Speaker, TimeWindow, Transcript

__all__ = [
    "CodeEntry",
    "CodeRegistry",
    "DataPoint",
    "ParsedCodes",
    "ParseResult",
    "ParsedTurn",
    "Speaker",
    "TimeWindow",
    "Transcript",
    "Turn",
    "turns_from_words",
]
