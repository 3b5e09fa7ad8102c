"""Question/answer pairing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from turnscope.core.analysis.turn_features import chronological_turns, is_question_turn
from turnscope.core.domain.data_point import DataPoint


@dataclass
class QuestionAnswerPair:
    question_speaker: str
    question_content: str
    question_turn: int
    question_first_word: DataPoint
    answer_speaker: Optional[str] = None
    answer_content: Optional[str] = None
    answer_turn: Optional[int] = None
    answer_first_word: Optional[DataPoint] = None

    @property
    def answered(self) -> bool:
        return self.answer_speaker is not None

    def to_dict(self) -> dict:
        return {
            "question_speaker": self.question_speaker,
            "question_content": self.question_content,
            "question_turn": self.question_turn,
            "question_start": self.question_first_word.start_time,
            "answer_speaker": self.answer_speaker,
            "answer_content": self.answer_content,
            "answer_turn": self.answer_turn,
            "answer_start": self.answer_first_word.start_time if self.answer_first_word else None,
        }


def question_answer_pairs(
    words: Sequence[DataPoint], enabled_speakers: Sequence[str]
) -> List[QuestionAnswerPair]:
    """
    Pair each question turn by an enabled speaker with its answer.

    The answer is the first later turn whose speaker differs from the
    asker and is enabled. A follow-up turn by the asker is skipped over.
    """
    enabled = set(enabled_speakers)
    turns = chronological_turns(words)
    pairs: List[QuestionAnswerPair] = []

    for index, turn in enumerate(turns):
        if turn.speaker not in enabled or not is_question_turn(turn):
            continue

        pair = QuestionAnswerPair(
            question_speaker=turn.speaker,
            question_content=turn.content,
            question_turn=turn.turn_number,
            question_first_word=turn.first_word,
        )
        for later in turns[index + 1:]:
            if later.speaker != turn.speaker and later.speaker in enabled:
                pair.answer_speaker = later.speaker
                pair.answer_content = later.content
                pair.answer_turn = later.turn_number
                pair.answer_first_word = later.first_word
                break
        pairs.append(pair)

    return pairs
