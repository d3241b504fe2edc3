"""
Data loading functions for survey comparisons.

This module builds a SurveyRepository from a YAML survey document and
bulk-loads answer records from CSV. No scoring is done here - that's
handled by the scoring and comparison modules.

Survey YAML layout:
    scales:          named, reusable ordered answer lists
    questions:       id, text, and either a scale name or inline answers
    users:           id (optional), name, description
    question_sets:   id (optional), name, question ids
    answers:         user (id or unique name), question id, answer
"""

import logging
from pathlib import Path
from typing import Dict, List, Any, Optional, Tuple

import pandas as pd
import yaml

from ..records import IdGenerator, SurveyRepository, User

logger = logging.getLogger(__name__)

ANSWER_CSV_COLUMNS = ["user_id", "question_id", "answer"]


def load_survey(filepath: str, id_generator: Optional[IdGenerator] = None) -> SurveyRepository:
    """
    Load a survey document into a new repository.

    Args:
        filepath: Path to the survey YAML file
        id_generator: Generator for identifiers the document leaves out

    Returns:
        Populated SurveyRepository

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or references unknown entries
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Survey file not found: {filepath}")

    logger.info(f"Loading survey from {filepath}")
    with open(filepath, "r") as f:
        document = yaml.safe_load(f)

    if not document:
        raise ValueError(f"Survey file is empty: {filepath}")

    repository = build_repository(document, id_generator)
    logger.info(f"Loaded {len(repository.questions)} questions, {len(repository.users)} users, "
                f"{len(repository.answered_questions)} answers")
    return repository


def build_repository(
    document: Dict[str, Any],
    id_generator: Optional[IdGenerator] = None
) -> SurveyRepository:
    """
    Build a repository from an already-parsed survey document.

    Raises:
        ValueError: On missing required keys, unknown scale names or unknown
            user/question references
    """
    repository = SurveyRepository(id_generator)
    scales = document.get("scales") or {}

    for entry in document.get("questions") or []:
        text = _require(entry, "text", "Question")
        answers = _resolve_scale(entry, scales)
        repository.add_question(
            text=text,
            answers=answers,
            question_id=entry.get("id")
        )

    for entry in document.get("users") or []:
        repository.add_user(
            name=_require(entry, "name", "User"),
            description=entry.get("description", ""),
            user_id=entry.get("id")
        )

    for entry in document.get("question_sets") or []:
        name = _require(entry, "name", "Question set")
        question_ids = entry.get("questions") or []
        unknown = [q for q in question_ids if not repository.has_question(q)]
        if unknown:
            raise ValueError(f"Question set {name!r} references unknown questions: {unknown}")
        repository.add_question_set(
            name=name,
            question_ids=question_ids,
            set_id=entry.get("id")
        )

    for entry in document.get("answers") or []:
        user_ref = _require(entry, "user", "Answer")
        question_id = _require(entry, "question", "Answer")
        answer = _require(entry, "answer", "Answer")
        user = _resolve_user(repository, user_ref)
        if user is None:
            raise ValueError(f"Answer references unknown user: {user_ref!r}")
        if not repository.has_question(question_id):
            raise ValueError(f"Answer references unknown question: {question_id!r}")
        repository.record_answer(
            question_id=question_id,
            user_id=user.user_id,
            answer=str(answer)
        )

    return repository


def _require(entry: Any, key: str, kind: str) -> Any:
    """Value of a required key in a document entry."""
    if not isinstance(entry, dict) or key not in entry:
        raise ValueError(f"{kind} entry is missing {key!r}: {entry!r}")
    return entry[key]


def _resolve_scale(entry: Dict[str, Any], scales: Dict[str, List[str]]) -> List[str]:
    """Answer list of a question entry, from its named scale or inline answers."""
    if "answers" in entry:
        return [str(a) for a in entry["answers"]]

    scale_name = entry.get("scale")
    if scale_name not in scales:
        raise ValueError(f"Question {entry.get('id', entry.get('text'))!r} uses unknown scale: {scale_name!r}")
    return [str(a) for a in scales[scale_name]]


def _resolve_user(repository: SurveyRepository, ref: str) -> Optional[User]:
    """Look a user up by id, falling back to a unique name."""
    if repository.has_user(ref):
        return repository.get_user(ref)

    matches = [u for u in repository.users if u.name == ref]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        logger.warning(f"User reference {ref!r} matches {len(matches)} users by name")
    return None


def validate_answer_columns(df: pd.DataFrame) -> List[str]:
    """
    Check that an answers table has the expected columns.

    Args:
        df: Answers DataFrame

    Returns:
        List of missing column names (empty if all present)
    """
    return [c for c in ANSWER_CSV_COLUMNS if c not in df.columns]


def load_answers_csv(filepath: str, repository: SurveyRepository) -> Tuple[int, int]:
    """
    Bulk-load answer records from CSV into a repository.

    The CSV must have columns user_id, question_id and answer. Rows that
    reference an unknown user or question, or have an empty field, are
    logged and skipped.

    Args:
        filepath: Path to the answers CSV file
        repository: Repository receiving the records

    Returns:
        Tuple of (rows loaded, rows skipped)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Answers file not found: {filepath}")

    logger.info(f"Loading answers from {filepath}")
    df = pd.read_csv(filepath, dtype=str, keep_default_na=False)

    missing_cols = validate_answer_columns(df)
    if missing_cols:
        raise ValueError(f"Answers file {filepath} is missing columns: {missing_cols}")

    loaded = 0
    skipped = 0
    for row_number, row in enumerate(df[ANSWER_CSV_COLUMNS].itertuples(index=False), start=2):
        user_id, question_id, answer = (str(v).strip() for v in row)
        if not user_id or not question_id or not answer:
            logger.warning(f"{filepath}:{row_number}: empty field, skipping")
            skipped += 1
            continue
        if not repository.has_user(user_id):
            logger.warning(f"{filepath}:{row_number}: unknown user {user_id!r}, skipping")
            skipped += 1
            continue
        if not repository.has_question(question_id):
            logger.warning(f"{filepath}:{row_number}: unknown question {question_id!r}, skipping")
            skipped += 1
            continue

        repository.record_answer(question_id=question_id, user_id=user_id, answer=answer)
        loaded += 1

    logger.info(f"Loaded {loaded} answers ({skipped} skipped)")
    return loaded, skipped
