"""Reporting module for comparison runs."""

from .report import (
    compute_score_distribution_stats,
    create_comparison_report,
    format_total,
    round_percent,
    ComparisonReport,
    ScoreDistributionStats
)

__all__ = [
    "compute_score_distribution_stats",
    "create_comparison_report",
    "format_total",
    "round_percent",
    "ComparisonReport",
    "ScoreDistributionStats"
]
