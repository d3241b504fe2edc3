"""Data loading module for surveys and answer records."""

from .loaders import load_survey, build_repository, load_answers_csv, validate_answer_columns

__all__ = ["load_survey", "build_repository", "load_answers_csv", "validate_answer_columns"]
