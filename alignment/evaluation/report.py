"""
Comparison reports.

Collects the pairwise comparison results of one run and renders them as
text, JSON or pandas tables. Score distribution statistics summarise the
aggregate scores of all pairs that could be scored.

Displayed percentages are rounded to whole numbers (halves round up).
Incomparable answers are never displayed as a percentage.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from ..comparison import ComparisonStatus, PairComparison
from ..pair_generation import PairGenerator
from ..records import User

logger = logging.getLogger(__name__)

NO_COMMON_ANSWERS_TEXT = "No questions answered in common"
NO_COMPARABLE_ANSWERS_TEXT = "No comparable answers in common"
INCOMPARABLE_TEXT = "n/a"

DEFAULT_QUANTILES = [0.1, 0.25, 0.5, 0.75, 0.9]

FRAME_COLUMNS = [
    "user_a", "user_b", "question_id", "question",
    "answer_a", "answer_b", "score", "band", "pair_aggregate"
]


def round_percent(score: float) -> int:
    """Round to a whole percent, halves up."""
    return int(math.floor(score + 0.5))


def format_percent(score: float, round_scores: bool = True) -> str:
    if round_scores:
        return f"{round_percent(score)}"
    return f"{score:.2f}"


def format_total(score: float, round_scores: bool = True) -> str:
    """Pair total line, e.g. ``total 38 %``."""
    return f"total {format_percent(score, round_scores)} %"


@dataclass
class ScoreDistributionStats:
    """Statistics about the distribution of pair scores."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 20.0, "p50": 50.0, "p90": 80.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Optional[List[float]] = None
) -> Optional[ScoreDistributionStats]:
    """
    Compute distribution statistics for pair scores.

    Args:
        scores: Array of aggregate scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance, or None if there are no scores
    """
    if quantiles is None:
        quantiles = DEFAULT_QUANTILES

    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        return None

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


@dataclass
class ComparisonReport:
    """
    Complete comparison report for one run.

    Attributes:
        title: Report title, usually the question set name
        users: Users compared, in pair enumeration order
        comparisons: One result per unordered user pair, canonical order
        distribution_stats: Statistics over the scored pairs' aggregates
    """
    title: str
    users: List[User]
    comparisons: List[PairComparison]
    distribution_stats: Optional[ScoreDistributionStats] = None

    @property
    def scored(self) -> List[PairComparison]:
        return [c for c in self.comparisons if c.status is ComparisonStatus.SCORED]

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "title": self.title,
            "n_users": len(self.users),
            "n_pairs": len(self.comparisons),
            "pairs": [c.to_dict() for c in self.comparisons]
        }
        if self.distribution_stats:
            result["distribution_stats"] = self.distribution_stats.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved comparison report to {filepath}")

    def to_frame(self) -> pd.DataFrame:
        """One row per compared question; incomparable scores are NaN."""
        rows = []
        for comparison in self.comparisons:
            for q in comparison.questions:
                rows.append({
                    "user_a": comparison.user_a.name,
                    "user_b": comparison.user_b.name,
                    "question_id": q.question.question_id,
                    "question": q.question.text,
                    "answer_a": q.answer_a,
                    "answer_b": q.answer_b,
                    "score": q.score if q.comparable else np.nan,
                    "band": q.band.value,
                    "pair_aggregate": comparison.aggregate if comparison.aggregate is not None else np.nan
                })
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def score_matrix(self) -> pd.DataFrame:
        """
        Symmetric user-by-user table of aggregate scores.

        Pairs that could not be scored, and the diagonal, are NaN.

        Raises:
            ValueError: If the comparisons do not cover every user pair
        """
        n = len(self.users)
        indices_a, indices_b = PairGenerator().generate_pairs(n)
        if len(indices_a) != len(self.comparisons):
            raise ValueError(
                f"Expected {len(indices_a)} pair comparisons for {n} users, "
                f"got {len(self.comparisons)}"
            )

        matrix = np.full((n, n), np.nan)
        aggregates = np.array(
            [c.aggregate if c.aggregate is not None else np.nan for c in self.comparisons],
            dtype=float
        )
        matrix[indices_a, indices_b] = aggregates
        matrix[indices_b, indices_a] = aggregates

        names = [u.name for u in self.users]
        return pd.DataFrame(matrix, index=names, columns=names)

    def summary(self, round_scores: bool = True) -> str:
        """Generate text summary of the report."""
        lines = [
            f"Comparisons: {self.title}",
            "=" * 50,
        ]

        for c in self.comparisons:
            lines.append("")
            lines.append(
                f"{c.user_a.name} ({c.user_a.description}) ----- "
                f"{c.user_b.name} ({c.user_b.description})"
            )

            if c.status is ComparisonStatus.NO_COMMON_ANSWERS:
                lines.append(f"  {NO_COMMON_ANSWERS_TEXT}")
                continue
            if c.status is ComparisonStatus.SCORED:
                lines.append(f"  {format_total(c.aggregate, round_scores)}")
            else:
                lines.append(f"  {NO_COMPARABLE_ANSWERS_TEXT}")

            for q in c.questions:
                if q.comparable:
                    lines.append(f"  {format_percent(q.score, round_scores)}% {q.question.text}")
                else:
                    lines.append(f"  {INCOMPARABLE_TEXT} {q.question.text}")
                lines.append(f"    {c.user_a.name}: {q.answer_a}")
                lines.append(f"    {c.user_b.name}: {q.answer_b}")

        if self.distribution_stats:
            stats = self.distribution_stats
            lines.extend([
                "",
                f"Score Distribution ({stats.count} scored pairs):",
                f"  Mean: {stats.mean:.2f}",
                f"  Std:  {stats.std:.2f}",
                f"  Min:  {stats.min:.2f}",
                f"  Max:  {stats.max:.2f}",
            ])
            for q_name, q_value in stats.quantiles.items():
                lines.append(f"  {q_name}: {q_value:.2f}")

        return "\n".join(lines)


def create_comparison_report(
    title: str,
    users: List[User],
    comparisons: List[PairComparison],
    quantiles: Optional[List[float]] = None
) -> ComparisonReport:
    """
    Create a comparison report with distribution statistics.

    Args:
        title: Report title
        users: Users that were compared
        comparisons: Pair comparison results
        quantiles: Quantiles to compute

    Returns:
        ComparisonReport instance
    """
    aggregates = np.array(
        [c.aggregate for c in comparisons if c.status is ComparisonStatus.SCORED],
        dtype=float
    )
    dist_stats = compute_score_distribution_stats(aggregates, quantiles)

    return ComparisonReport(
        title=title,
        users=list(users),
        comparisons=comparisons,
        distribution_stats=dist_stats
    )
