"""Ordinal alignment scoring for answered survey questions."""

from .ordinal import (
    INCOMPARABLE,
    AnswerTriple,
    EmptyComparisonError,
    ScoreBand,
    aggregate_score,
    is_comparable,
    score_answers,
    score_band,
    score_triples,
)

__all__ = [
    "INCOMPARABLE",
    "AnswerTriple",
    "EmptyComparisonError",
    "ScoreBand",
    "aggregate_score",
    "is_comparable",
    "score_answers",
    "score_band",
    "score_triples",
]
