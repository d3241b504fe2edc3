"""
Ordinal alignment scoring.

Two users' answers to the same question are compared by their positions
on the question's ordered answer scale, not by the answer text.

Per-question Score Formula (N answers on the scale):
    d = |index(A) - index(B)|
    score = (N - 1 - d) / (N - 1) * 100

Identical answers score 100, opposite ends of the scale score 0, and
everything in between is a linear interpolation. An answer that is not
on the scale yields the INCOMPARABLE sentinel instead of a percentage.

Aggregate Formula:
    aggregate = mean(score_i) over the questions both users answered
"""

import logging
from enum import Enum
from typing import Iterable, Sequence, Tuple

import numpy as np

from ..records.schema import Answer, Question

logger = logging.getLogger(__name__)

INCOMPARABLE = -1.0
FULL_SCORE = 100.0

# (question, answer of user A, answer of user B)
AnswerTriple = Tuple[Question, Answer, Answer]


class EmptyComparisonError(ValueError):
    """Raised when an aggregate score is requested over zero questions."""


class ScoreBand(Enum):
    """Display band of a per-question or aggregate score."""
    FULL = "score100"
    PARTIAL = "scoremiddle"
    NONE = "score0"
    INCOMPARABLE = "incomparable"


def score_answers(answer_a: Answer, answer_b: Answer, question: Question) -> float:
    """
    Score how closely two answers to one question agree.

    Args:
        answer_a: First user's answer
        answer_b: Second user's answer
        question: Question whose ordered answers define the scale

    Returns:
        Percentage in [0, 100], or INCOMPARABLE (-1) if either answer is
        not on the question's scale
    """
    index_a = question.index_of(answer_a)
    index_b = question.index_of(answer_b)
    if index_a == -1 or index_b == -1:
        return INCOMPARABLE

    if index_a == index_b:
        return FULL_SCORE

    # Unreachable with a single-answer scale: both indices would be 0
    n = question.n_answers
    distance = abs(index_a - index_b)
    return (n - 1 - distance) / (n - 1) * FULL_SCORE


def is_comparable(score: float) -> bool:
    """True for a real percentage, False for the INCOMPARABLE sentinel."""
    return score != INCOMPARABLE


def score_band(score: float) -> ScoreBand:
    """Classify a score for display."""
    if not is_comparable(score):
        return ScoreBand.INCOMPARABLE
    if score == FULL_SCORE:
        return ScoreBand.FULL
    if score == 0:
        return ScoreBand.NONE
    return ScoreBand.PARTIAL


def score_triples(triples: Iterable[AnswerTriple]) -> np.ndarray:
    """Per-question scores for a sequence of (question, answer_a, answer_b)."""
    return np.array(
        [score_answers(a, b, q) for q, a, b in triples],
        dtype=float
    )


def aggregate_score(triples: Sequence[AnswerTriple]) -> float:
    """
    Mean per-question score over the questions a pair answered in common.

    Callers check for an empty common-question set first and report
    "no questions answered in common" instead of calling this. Sentinel
    scores are averaged like any other value, so callers drop
    incomparable triples before aggregating.

    Args:
        triples: Non-empty sequence of (question, answer_a, answer_b)

    Returns:
        Arithmetic mean of the per-question scores

    Raises:
        EmptyComparisonError: If ``triples`` is empty
    """
    if len(triples) == 0:
        raise EmptyComparisonError("Cannot aggregate scores over zero questions")

    scores = score_triples(triples)
    return float(np.mean(scores))
