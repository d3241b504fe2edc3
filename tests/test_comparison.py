"""Tests for the pairwise comparison driver."""

import pytest

from alignment.comparison import ComparisonStatus, common_triples, compare_all, compare_pair
from alignment.records import IdGenerator, SurveyRepository
from alignment.scoring import INCOMPARABLE, ScoreBand


def _pair(results, name_a, name_b):
    for r in results:
        if (r.user_a.name, r.user_b.name) == (name_a, name_b):
            return r
    raise AssertionError(f"No comparison for {name_a}/{name_b}")


class TestCommonTriples:
    def test_only_questions_answered_by_both(self, repository: SurveyRepository) -> None:
        leo = repository.get_user("leo")
        sally = repository.get_user("sally")

        triples = common_triples(leo, sally, repository, repository.questions)

        assert [(q.question_id, a, b) for q, a, b in triples] == [("q_freq", "never", "sometimes")]

    def test_no_common_answers(self, repository: SurveyRepository) -> None:
        leo = repository.get_user("leo")
        nathan = repository.get_user("nathan")

        assert common_triples(leo, nathan, repository, repository.questions) == []


class TestComparePair:
    def test_scored_pair(self, repository: SurveyRepository) -> None:
        result = compare_pair(
            repository.get_user("leo"), repository.get_user("linda"),
            repository, repository.questions
        )

        assert result.status is ComparisonStatus.SCORED
        assert [q.score for q in result.questions] == [0, 75]
        assert result.aggregate == pytest.approx(37.5)
        assert result.band is ScoreBand.PARTIAL

    def test_answers_kept_in_user_order(self, repository: SurveyRepository) -> None:
        result = compare_pair(
            repository.get_user("linda"), repository.get_user("leo"),
            repository, repository.questions
        )

        assert result.questions[0].answer_a == "always"
        assert result.questions[0].answer_b == "never"

    def test_no_common_answers(self, repository: SurveyRepository) -> None:
        result = compare_pair(
            repository.get_user("sally"), repository.get_user("nathan"),
            repository, repository.questions
        )

        assert result.status is ComparisonStatus.NO_COMMON_ANSWERS
        assert result.questions == []
        assert result.aggregate is None
        assert result.band is ScoreBand.INCOMPARABLE

    def test_incomparable_answers_excluded_from_aggregate(self, repository: SurveyRepository) -> None:
        repository.record_answer("q_five", "sally", "z")
        repository.add_user("kim", "mixed", user_id="kim")
        repository.record_answer("q_freq", "kim", "never")
        repository.record_answer("q_five", "kim", "a")

        result = compare_pair(
            repository.get_user("sally"), repository.get_user("kim"),
            repository, repository.questions
        )

        assert result.status is ComparisonStatus.SCORED
        assert len(result.questions) == 2
        incomparable = result.questions[1]
        assert not incomparable.comparable
        assert incomparable.score == INCOMPARABLE
        assert incomparable.band is ScoreBand.INCOMPARABLE
        assert result.comparable_questions == [result.questions[0]]
        assert result.aggregate == 50

    def test_only_incomparable_answers(self) -> None:
        repo = SurveyRepository(IdGenerator())
        repo.add_question("q", ["low", "high"], question_id="q")
        repo.add_user("a", user_id="a")
        repo.add_user("b", user_id="b")
        repo.record_answer("q", "a", "low")
        repo.record_answer("q", "b", "medium")

        result = compare_pair(repo.get_user("a"), repo.get_user("b"), repo, repo.questions)

        assert result.status is ComparisonStatus.NO_COMPARABLE_ANSWERS
        assert result.aggregate is None
        assert len(result.questions) == 1

    def test_to_dict_hides_sentinel(self) -> None:
        repo = SurveyRepository(IdGenerator())
        repo.add_question("q", ["low", "high"], question_id="q")
        repo.add_user("a", user_id="a")
        repo.add_user("b", user_id="b")
        repo.record_answer("q", "a", "low")
        repo.record_answer("q", "b", "medium")

        data = compare_pair(repo.get_user("a"), repo.get_user("b"), repo, repo.questions).to_dict()

        assert data["status"] == "no_comparable_answers"
        assert data["questions"][0]["score"] is None
        assert data["questions"][0]["comparable"] is False


class TestCompareAll:
    def test_every_pair_compared_once(self, repository: SurveyRepository) -> None:
        results = compare_all(repository)

        assert len(results) == 6
        assert [(r.user_a.name, r.user_b.name) for r in results] == [
            ("leo", "linda"), ("leo", "sally"), ("leo", "nathan"),
            ("linda", "sally"), ("linda", "nathan"),
            ("sally", "nathan"),
        ]

    def test_scores(self, repository: SurveyRepository) -> None:
        results = compare_all(repository)

        assert _pair(results, "leo", "linda").aggregate == pytest.approx(37.5)
        assert _pair(results, "leo", "sally").aggregate == 50
        assert _pair(results, "linda", "sally").aggregate == 50
        for name in ("leo", "linda", "sally"):
            assert _pair(results, name, "nathan").status is ComparisonStatus.NO_COMMON_ANSWERS

    def test_question_set_restricts_questions(self, repository: SurveyRepository) -> None:
        results = compare_all(repository, repository.get_question_set("freq_only"))

        leo_linda = _pair(results, "leo", "linda")
        assert [q.question.question_id for q in leo_linda.questions] == ["q_freq"]
        assert leo_linda.aggregate == 0
        assert leo_linda.band is ScoreBand.NONE

    def test_end_to_end_three_point_scenario(self) -> None:
        repo = SurveyRepository(IdGenerator())
        repo.add_question("Q", ["never", "sometimes", "always"], question_id="Q")
        for name in ("user1", "user2", "user3"):
            repo.add_user(name, user_id=name)
        repo.record_answer("Q", "user1", "never")
        repo.record_answer("Q", "user2", "always")
        repo.record_answer("Q", "user3", "sometimes")

        results = compare_all(repo)

        assert _pair(results, "user1", "user2").aggregate == 0
        assert _pair(results, "user1", "user3").aggregate == 50
        assert _pair(results, "user2", "user3").aggregate == 50

    def test_no_users(self) -> None:
        assert compare_all(SurveyRepository()) == []
