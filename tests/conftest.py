import pytest

from grade_trends.evaluations import CompletedEvaluation, PendingEvaluation


@pytest.fixture
def half_graded():
    # 10 of 20 points graded at 50%
    return [
        CompletedEvaluation(name="Quiz 1", score=5, total=10),
        PendingEvaluation(name="Quiz 2", total=10),
    ]


@pytest.fixture
def fully_graded():
    return [
        CompletedEvaluation(name="Quiz 1", score=9, total=10),
        CompletedEvaluation(name="Quiz 2", score=8, total=10),
    ]


@pytest.fixture
def mixed_class():
    return [
        CompletedEvaluation(name="Lab 1", score=18, total=20),
        PendingEvaluation(name="Midterm", total=40),
        CompletedEvaluation(name="Lab 2", score=0, total=20),
        CompletedEvaluation(name="Quiz", score=7.5, total=10),
        PendingEvaluation(name="Final", total=60),
    ]


@pytest.fixture
def sample_sets(half_graded, fully_graded, mixed_class):
    return [
        [],
        [PendingEvaluation(name="Final", total=100)],
        half_graded,
        fully_graded,
        mixed_class,
        [CompletedEvaluation(name="Exam", score=30, total=30), PendingEvaluation(name="Project", total=10)],
        [CompletedEvaluation(name="Exam", score=0, total=30), PendingEvaluation(name="Project", total=10)],
    ]
