"""
Survey Alignment Scoring

This package compares users' answers to ordinal survey questions and
reports how closely each pair of users is aligned.

Key Design Decisions:
- Questions are ordinal scales: answer position encodes relative standing
- Per-question scores are linear in ordinal distance (100 = same answer)
- Pair scores average only the questions both users answered
- Scoring is pure; loading, reporting and UI are separate layers
"""

__version__ = "1.0.0"
