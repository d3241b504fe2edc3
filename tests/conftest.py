"""Shared fixtures for the alignment test suite."""

import pytest

from alignment.records import IdGenerator, Question, QuestionId, SurveyRepository


@pytest.fixture
def three_point_question() -> Question:
    return Question(
        question_id=QuestionId("q_freq"),
        text="how often is it OK to be late",
        answers=["never", "sometimes", "always"],
    )


@pytest.fixture
def five_point_question() -> Question:
    return Question(
        question_id=QuestionId("q_five"),
        text="how strongly do you agree",
        answers=["a", "b", "c", "d", "e"],
    )


@pytest.fixture
def repository() -> SurveyRepository:
    """
    Four users, two questions.

    leo and linda answer both questions, sally answers only the first,
    nathan answers nothing.
    """
    repo = SurveyRepository(IdGenerator())
    repo.add_question("how often is it OK to be late", ["never", "sometimes", "always"], question_id="q_freq")
    repo.add_question("how strongly do you agree", ["a", "b", "c", "d", "e"], question_id="q_five")

    repo.add_user("leo", "left", user_id="leo")
    repo.add_user("linda", "right", user_id="linda")
    repo.add_user("sally", "middle", user_id="sally")
    repo.add_user("nathan", "has not answered", user_id="nathan")

    repo.record_answer("q_freq", "leo", "never")
    repo.record_answer("q_five", "leo", "a")
    repo.record_answer("q_freq", "linda", "always")
    repo.record_answer("q_five", "linda", "b")
    repo.record_answer("q_freq", "sally", "sometimes")

    repo.add_question_set("Frequency only", ["q_freq"], set_id="freq_only")
    return repo
