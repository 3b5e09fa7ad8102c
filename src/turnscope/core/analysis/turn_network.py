"""
Turn-taking network.

Nodes are speakers; a directed edge A -> B counts how often B's turn
followed A's. Self-edges appear when a speaker takes two turns in a row.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from turnscope.core.domain.data_point import DataPoint


@dataclass
class Transition:
    count: int = 0
    word_count: int = 0
    turn_start_points: List[DataPoint] = field(default_factory=list)


@dataclass
class SpeakerStats:
    word_count: int = 0
    turn_count: int = 0
    turn_start_points: List[DataPoint] = field(default_factory=list)


@dataclass
class NetworkData:
    transitions: Dict[str, Dict[str, Transition]] = field(default_factory=dict)
    speaker_stats: Dict[str, SpeakerStats] = field(default_factory=dict)

    def edges(self) -> List[tuple]:
        """(source, target, count, word_count) for every edge."""
        return [
            (source, target, transition.count, transition.word_count)
            for source, targets in self.transitions.items()
            for target, transition in targets.items()
        ]

    def total_transitions(self) -> int:
        return sum(edge[2] for edge in self.edges())

    def to_dict(self) -> dict:
        return {
            "transitions": {
                source: {
                    target: {"count": t.count, "word_count": t.word_count}
                    for target, t in targets.items()
                }
                for source, targets in self.transitions.items()
            },
            "speaker_stats": {
                speaker: {"word_count": s.word_count, "turn_count": s.turn_count}
                for speaker, s in self.speaker_stats.items()
            },
        }


def build_turn_network(words: Sequence[DataPoint]) -> NetworkData:
    """
    Single forward pass over the words.

    Every word adds to its speaker's word count. A change of turn number
    starts a turn for the speaker and, when there was a previous turn, bumps
    the edge from the previous speaker; the rest of that turn's words add to
    the edge's word count.
    """
    network = NetworkData()
    previous_speaker: Optional[str] = None
    previous_turn: Optional[int] = None
    current_edge: Optional[Transition] = None

    for dp in words:
        stats = network.speaker_stats.setdefault(dp.speaker, SpeakerStats())
        stats.word_count += 1

        if dp.turn_number != previous_turn:
            stats.turn_count += 1
            stats.turn_start_points.append(dp)
            current_edge = None
            if previous_speaker is not None:
                targets = network.transitions.setdefault(previous_speaker, {})
                current_edge = targets.setdefault(dp.speaker, Transition())
                current_edge.count += 1
                current_edge.turn_start_points.append(dp)
            previous_speaker = dp.speaker
            previous_turn = dp.turn_number

        if current_edge is not None:
            current_edge.word_count += 1

    return network
