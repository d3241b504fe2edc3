"""Pairwise comparison driver."""

from .driver import (
    ComparisonStatus,
    PairComparison,
    QuestionComparison,
    common_triples,
    compare_all,
    compare_pair,
)

__all__ = [
    "ComparisonStatus",
    "PairComparison",
    "QuestionComparison",
    "common_triples",
    "compare_all",
    "compare_pair",
]
