"""
In-memory survey repository.

Holds the questions, users, question sets and answered-question records
that a comparison run reads. Plays the question, user and answer
repository roles for the comparison driver; it does no I/O of its own
(see ``alignment.data_loading`` for loaders).
"""

import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .identifiers import IdGenerator
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

logger = logging.getLogger(__name__)

ANSWER_COLUMNS = ["record_id", "question_id", "user_id", "answer"]


class SurveyRepository:
    """
    Store for survey records.

    Insertion order is preserved for questions, users and question sets,
    since comparison output follows it.

    Attributes:
        id_generator: Shared generator used to mint missing identifiers
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        self.id_generator = id_generator or IdGenerator()
        self._questions: Dict[QuestionId, Question] = {}
        self._users: Dict[UserId, User] = {}
        self._question_sets: Dict[QuestionSetId, QuestionSet] = {}
        self._records: List[AnsweredQuestion] = []
        self._answer_index: Dict[Tuple[UserId, QuestionId], Answer] = {}

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    def add_question(
        self,
        text: str,
        answers: List[str],
        question_id: Optional[str] = None
    ) -> Question:
        """
        Add a question with an ordered answer scale.

        Raises:
            ValueError: If the id is already taken or the scale is invalid
        """
        if question_id is None:
            question_id = self.id_generator.make_id()
        if question_id in self._questions:
            raise ValueError(f"Duplicate question id: {question_id}")

        question = Question(
            question_id=QuestionId(question_id),
            text=text,
            answers=[Answer(a) for a in answers]
        )
        self._questions[question.question_id] = question
        return question

    def get_question(self, question_id: str) -> Question:
        try:
            return self._questions[QuestionId(question_id)]
        except KeyError:
            raise KeyError(f"Unknown question id: {question_id}") from None

    def has_question(self, question_id: str) -> bool:
        return question_id in self._questions

    @property
    def questions(self) -> List[Question]:
        return list(self._questions.values())

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def add_user(
        self,
        name: str,
        description: str = "",
        user_id: Optional[str] = None
    ) -> User:
        """Add a user; the id defaults to one labelled with the user's name."""
        if user_id is None:
            user_id = self.id_generator.make_id(name)
        if user_id in self._users:
            raise ValueError(f"Duplicate user id: {user_id}")

        user = User(user_id=UserId(user_id), name=name, description=description)
        self._users[user.user_id] = user
        return user

    def get_user(self, user_id: str) -> User:
        try:
            return self._users[UserId(user_id)]
        except KeyError:
            raise KeyError(f"Unknown user id: {user_id}") from None

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    @property
    def users(self) -> List[User]:
        return list(self._users.values())

    # -------------------------------------------------------------------------
    # Question sets
    # -------------------------------------------------------------------------

    def add_question_set(
        self,
        name: str,
        question_ids: List[str],
        set_id: Optional[str] = None
    ) -> QuestionSet:
        """
        Add a named bundle of existing questions.

        Raises:
            KeyError: If any question id is unknown
            ValueError: If the set id is already taken
        """
        for question_id in question_ids:
            self.get_question(question_id)

        if set_id is None:
            set_id = self.id_generator.make_id(name)
        if set_id in self._question_sets:
            raise ValueError(f"Duplicate question set id: {set_id}")

        question_set = QuestionSet(
            set_id=QuestionSetId(set_id),
            name=name,
            question_ids=[QuestionId(q) for q in question_ids]
        )
        self._question_sets[question_set.set_id] = question_set
        return question_set

    def get_question_set(self, set_id: str) -> QuestionSet:
        try:
            return self._question_sets[QuestionSetId(set_id)]
        except KeyError:
            raise KeyError(f"Unknown question set id: {set_id}") from None

    @property
    def question_sets(self) -> List[QuestionSet]:
        return list(self._question_sets.values())

    def questions_in(self, question_set: Optional[QuestionSet] = None) -> List[Question]:
        """Questions of a set in set order, or every question when no set is given."""
        if question_set is None:
            return self.questions
        return [self.get_question(q) for q in question_set.question_ids]

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def record_answer(
        self,
        question_id: str,
        user_id: str,
        answer: str
    ) -> AnsweredQuestion:
        """
        Record one user's answer to one question.

        The answer is stored even if it is not on the question's scale;
        such answers are logged since they will score as incomparable.
        When a user answers the same question twice, lookups keep
        returning the first answer.

        Raises:
            KeyError: If the user or question is unknown
        """
        question = self.get_question(question_id)
        self.get_user(user_id)
        if question.index_of(Answer(answer)) == -1:
            logger.warning(
                f"Answer {answer!r} of user {user_id} is not on the scale of {question_id}: "
                f"{question.answers}"
            )

        record = AnsweredQuestion(
            record_id=AnsweredQuestionId(self.id_generator.make_id("com_question")),
            question_id=QuestionId(question_id),
            user_id=UserId(user_id),
            answer=Answer(answer)
        )
        self._records.append(record)

        key = (record.user_id, record.question_id)
        if key in self._answer_index:
            logger.warning(f"User {user_id} already answered {question_id}; keeping first answer")
        else:
            self._answer_index[key] = record.answer
        return record

    def get_answer(self, user_id: str, question_id: str) -> Optional[Answer]:
        """Selected answer for (user, question), or None if not answered."""
        return self._answer_index.get((UserId(user_id), QuestionId(question_id)))

    @property
    def answered_questions(self) -> List[AnsweredQuestion]:
        return list(self._records)

    def answers_frame(self) -> pd.DataFrame:
        """All answer records as a DataFrame, one row per record."""
        return pd.DataFrame(
            [r.to_dict() for r in self._records],
            columns=ANSWER_COLUMNS
        )
