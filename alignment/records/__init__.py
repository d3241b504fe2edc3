"""Survey record types, identifier generation and the in-memory repository."""

from .schema import (
    Answer,
    AnsweredQuestion,
    AnsweredQuestionId,
    Question,
    QuestionId,
    QuestionSet,
    QuestionSetId,
    User,
    UserId,
)
from .identifiers import IdGenerator
from .repository import SurveyRepository

__all__ = [
    "Answer",
    "AnsweredQuestion",
    "AnsweredQuestionId",
    "Question",
    "QuestionId",
    "QuestionSet",
    "QuestionSetId",
    "User",
    "UserId",
    "IdGenerator",
    "SurveyRepository",
]
