"""
Pairwise comparison of users' survey answers.

For every pair of users, each question is looked up in both users'
answers. Only questions answered by both users are compared; their
per-question scores are averaged into the pair's aggregate score.

The driver performs no I/O: it is handed an already-loaded repository
and returns plain result objects for a presentation layer to render.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..pair_generation import PairGenerator
from ..records import Answer, Question, QuestionSet, SurveyRepository, User
from ..scoring import (
    AnswerTriple,
    ScoreBand,
    aggregate_score,
    is_comparable,
    score_answers,
    score_band,
)

logger = logging.getLogger(__name__)


class ComparisonStatus(Enum):
    """Outcome of comparing one pair of users."""
    SCORED = "scored"
    NO_COMMON_ANSWERS = "no_common_answers"
    NO_COMPARABLE_ANSWERS = "no_comparable_answers"


@dataclass
class QuestionComparison:
    """
    Two users' answers to one common question.

    Attributes:
        question: The question both users answered
        answer_a: First user's answer
        answer_b: Second user's answer
        score: Alignment percentage, or the INCOMPARABLE sentinel
        band: Display band of the score
    """
    question: Question
    answer_a: Answer
    answer_b: Answer
    score: float
    band: ScoreBand

    @property
    def comparable(self) -> bool:
        return is_comparable(self.score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question_id": self.question.question_id,
            "question": self.question.text,
            "answer_a": self.answer_a,
            "answer_b": self.answer_b,
            "score": self.score if self.comparable else None,
            "band": self.band.value,
            "comparable": self.comparable
        }


@dataclass
class PairComparison:
    """
    Result of comparing one pair of users.

    Attributes:
        user_a: First user of the pair
        user_b: Second user of the pair
        questions: Every question both users answered, in question order
        status: Whether the pair could be scored
        aggregate: Mean score over comparable questions (None unless SCORED)
    """
    user_a: User
    user_b: User
    questions: List[QuestionComparison] = field(default_factory=list)
    status: ComparisonStatus = ComparisonStatus.NO_COMMON_ANSWERS
    aggregate: Optional[float] = None

    @property
    def band(self) -> ScoreBand:
        if self.aggregate is None:
            return ScoreBand.INCOMPARABLE
        return score_band(self.aggregate)

    @property
    def comparable_questions(self) -> List[QuestionComparison]:
        return [q for q in self.questions if q.comparable]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_a": self.user_a.to_dict(),
            "user_b": self.user_b.to_dict(),
            "status": self.status.value,
            "aggregate": self.aggregate,
            "band": self.band.value,
            "questions": [q.to_dict() for q in self.questions]
        }


def common_triples(
    user_a: User,
    user_b: User,
    repository: SurveyRepository,
    questions: Sequence[Question]
) -> List[AnswerTriple]:
    """
    Collect (question, answer_a, answer_b) for questions both users answered.

    Args:
        user_a: First user
        user_b: Second user
        repository: Source of recorded answers
        questions: Questions to consider, in output order

    Returns:
        List of triples; empty if the users share no answered question
    """
    triples = []
    for question in questions:
        answer_a = repository.get_answer(user_a.user_id, question.question_id)
        answer_b = repository.get_answer(user_b.user_id, question.question_id)
        if answer_a is not None and answer_b is not None:
            triples.append((question, answer_a, answer_b))
    return triples


def compare_pair(
    user_a: User,
    user_b: User,
    repository: SurveyRepository,
    questions: Sequence[Question]
) -> PairComparison:
    """
    Compare two users over a list of questions.

    Questions with an answer outside the question's scale are kept in
    the result but flagged incomparable and left out of the aggregate.

    Args:
        user_a: First user
        user_b: Second user
        repository: Source of recorded answers
        questions: Questions to compare on

    Returns:
        PairComparison with per-question scores and the aggregate
    """
    comparison = PairComparison(user_a=user_a, user_b=user_b)

    triples = common_triples(user_a, user_b, repository, questions)
    if not triples:
        return comparison

    for question, answer_a, answer_b in triples:
        score = score_answers(answer_a, answer_b, question)
        if not is_comparable(score):
            logger.warning(
                f"Incomparable answers to {question.question_id} for "
                f"{user_a.user_id}/{user_b.user_id}: {answer_a!r}, {answer_b!r}"
            )
        comparison.questions.append(QuestionComparison(
            question=question,
            answer_a=answer_a,
            answer_b=answer_b,
            score=score,
            band=score_band(score)
        ))

    comparable = [
        (q.question, q.answer_a, q.answer_b) for q in comparison.questions if q.comparable
    ]
    if not comparable:
        comparison.status = ComparisonStatus.NO_COMPARABLE_ANSWERS
        return comparison

    comparison.status = ComparisonStatus.SCORED
    comparison.aggregate = aggregate_score(comparable)
    return comparison


def compare_all(
    repository: SurveyRepository,
    question_set: Optional[QuestionSet] = None
) -> List[PairComparison]:
    """
    Compare every pair of users in the repository.

    Args:
        repository: Loaded survey data
        question_set: Restrict the comparison to this set's questions;
            all questions are used when omitted

    Returns:
        One PairComparison per unordered user pair, in canonical pair order
    """
    questions = repository.questions_in(question_set)
    pairs = PairGenerator().pairs_of(repository.users)

    results = [
        compare_pair(user_a, user_b, repository, questions)
        for user_a, user_b in pairs
    ]

    n_scored = sum(1 for r in results if r.status is ComparisonStatus.SCORED)
    logger.info(f"Compared {len(results)} pairs over {len(questions)} questions "
                f"({n_scored} scored)")
    return results
