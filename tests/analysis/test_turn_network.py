"""
Tests for the turn-taking network.
"""

from turnscope.core.analysis.turn_network import build_turn_network


def test_edges_and_speaker_stats(make_words):
    words = make_words(
        [("A", 1, "a"), ("A", 1, "b"), ("B", 2, "c"), ("B", 2, "d"), ("A", 3, "e"), ("A", 4, "f")]
    )
    network = build_turn_network(words)
    assert sorted(network.edges()) == [("A", "A", 1, 1), ("A", "B", 1, 2), ("B", "A", 1, 1)]
    assert network.total_transitions() == 3
    assert network.speaker_stats["A"].word_count == 4
    assert network.speaker_stats["A"].turn_count == 3
    assert network.speaker_stats["B"].turn_count == 1
    assert [dp.word for dp in network.transitions["A"]["B"].turn_start_points] == ["c"]


def test_to_dict(make_words):
    network = build_turn_network(make_words([("A", 1, "a"), ("B", 2, "b")]))
    assert network.to_dict() == {
        "transitions": {"A": {"B": {"count": 1, "word_count": 1}}},
        "speaker_stats": {
            "A": {"word_count": 1, "turn_count": 1},
            "B": {"word_count": 1, "turn_count": 1},
        },
    }


def test_empty():
    network = build_turn_network([])
    assert network.edges() == []
    assert network.total_transitions() == 0


def test_alternating_speakers(make_words):
    words = make_words([("A", 1, "a"), ("B", 2, "b"), ("A", 3, "c"), ("B", 4, "d"), ("A", 5, "e")])
    network = build_turn_network(words)
    assert network.total_transitions() == 4
    assert network.transitions["A"]["B"].count == 2
    assert network.transitions["B"]["A"].count == 2
