"""
Record types for survey alignment.

Defines the data structures the scoring layer reads: questions with an
ordered answer scale, users, and answered-question records.

Identifier and answer types are NewTypes over str. They are opaque and
only compared by equality within their own domain.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, NewType

Answer = NewType("Answer", str)
QuestionId = NewType("QuestionId", str)
UserId = NewType("UserId", str)
AnsweredQuestionId = NewType("AnsweredQuestionId", str)
QuestionSetId = NewType("QuestionSetId", str)


@dataclass
class Question:
    """
    A survey question with an ordinal answer scale.

    The order of ``answers`` is meaningful: it encodes a linear scale,
    e.g. "never" through "always". Scoring needs at least two answers
    for a non-degenerate result.

    Attributes:
        question_id: Unique question identifier
        text: Question text shown to users
        answers: Ordered, distinct answer choices
    """
    question_id: QuestionId
    text: str
    answers: List[Answer]

    def __post_init__(self):
        """Validate the answer scale."""
        self.answers = [Answer(a) for a in self.answers]
        if not self.answers:
            raise ValueError(f"Question {self.question_id} must have at least one answer")
        if len(set(self.answers)) != len(self.answers):
            raise ValueError(f"Question {self.question_id} has duplicate answers: {self.answers}")

    @property
    def n_answers(self) -> int:
        return len(self.answers)

    def index_of(self, answer: Answer) -> int:
        """Zero-based position of ``answer`` on the scale, or -1 if absent."""
        try:
            return self.answers.index(answer)
        except ValueError:
            return -1


@dataclass
class User:
    """
    A survey participant.

    Attributes:
        user_id: Unique user identifier
        name: Display name
        description: Free-text description
    """
    user_id: UserId
    name: str
    description: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description
        }


@dataclass
class AnsweredQuestion:
    """
    One user's answer to one question.

    The answer is not checked against the question's scale here; an
    out-of-scale answer is detected when it is scored.
    """
    record_id: AnsweredQuestionId
    question_id: QuestionId
    user_id: UserId
    answer: Answer

    def to_dict(self) -> Dict[str, str]:
        return {
            "record_id": self.record_id,
            "question_id": self.question_id,
            "user_id": self.user_id,
            "answer": self.answer
        }


@dataclass
class QuestionSet:
    """
    A named bundle of questions compared together.

    Attributes:
        set_id: Unique set identifier
        name: Display name, e.g. "Risk Alignment Test"
        question_ids: Ordered question identifiers in the set
    """
    set_id: QuestionSetId
    name: str
    question_ids: List[QuestionId] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "set_id": self.set_id,
            "name": self.name,
            "question_ids": list(self.question_ids)
        }

