import logging

import pytest

from grade_trends.evaluations import CompletedEvaluation, PendingEvaluation
from grade_trends.trend_logic import compute_required_trend, compute_trends


def test_half_graded_example(half_graded):
    trends = compute_trends(half_graded)

    assert trends.current_trend == 50
    assert trends.required_trend == 50
    assert trends.remaining_percentage == 50
    assert trends.cumulative_grade_available == 50
    assert trends.cumulative_grade_earned == 25

    assert len(trends.cumulative_points) == 1
    point = trends.cumulative_points[0]
    assert (point.x, point.y) == (50, 25)
    assert point.evaluation is half_graded[0]


def test_fully_graded_example(fully_graded):
    trends = compute_trends(fully_graded)

    assert trends.current_trend == pytest.approx(85)
    assert trends.cumulative_grade_earned == pytest.approx(85)
    assert trends.remaining_percentage == pytest.approx(0)
    assert trends.required_trend == 0


def test_no_completed_evaluations():
    evaluations = [PendingEvaluation(name="Midterm", total=40), PendingEvaluation(name="Final", total=60)]
    trends = compute_trends(evaluations)

    assert trends.current_trend == 0
    assert trends.required_trend == 50
    assert trends.remaining_percentage == 100
    assert trends.cumulative_points == []
    assert trends.evaluations is evaluations


def test_empty_class():
    trends = compute_trends([])
    assert trends.current_trend == 0
    assert trends.required_trend == 50
    assert trends.cumulative_points == []


@pytest.mark.parametrize("evaluations", [
    [CompletedEvaluation(name="a", score=0, total=0)],
    [CompletedEvaluation(name="a", score=5, total=10), PendingEvaluation(name="b", total=-10)],
])
def test_zero_total_points_returns_no_progress(evaluations):
    trends = compute_trends(evaluations)

    assert trends.current_trend == 0
    assert trends.required_trend == 50
    assert trends.remaining_percentage == 100
    assert trends.cumulative_points == []
    assert compute_required_trend(evaluations, 90) == 90


def test_perfect_marks():
    evaluations = [
        CompletedEvaluation(name="a", score=20, total=20),
        CompletedEvaluation(name="b", score=30, total=30),
        CompletedEvaluation(name="c", score=7, total=7),
    ]
    trends = compute_trends(evaluations)

    assert trends.current_trend == 100
    assert trends.required_trend == 0


def test_points_follow_original_order(mixed_class):
    trends = compute_trends(mixed_class)

    names = [p.evaluation.name for p in trends.cumulative_points]
    assert names == ["Lab 1", "Lab 2", "Quiz"]

    # 150 possible points: labs weigh 13.3% each, the quiz 6.7%
    xs = [p.x for p in trends.cumulative_points]
    assert xs == pytest.approx([40 / 3, 80 / 3, 100 / 3])
    ys = [p.y for p in trends.cumulative_points]
    assert ys == pytest.approx([12, 12, 17])


def test_points_are_non_decreasing(sample_sets):
    for evaluations in sample_sets:
        points = compute_trends(evaluations).cumulative_points
        for before, after in zip(points, points[1:]):
            assert after.x >= before.x
            assert after.y >= before.y


def test_required_trend_matches_midpoint_target(sample_sets):
    for evaluations in sample_sets:
        assert compute_required_trend(evaluations, 50) == compute_trends(evaluations).required_trend


def test_evaluations_passed_through(mixed_class):
    assert compute_trends(mixed_class).evaluations is mixed_class


def test_required_trend_above_full_marks():
    evaluations = [CompletedEvaluation(name="Exam", score=0, total=30), PendingEvaluation(name="Project", total=10)]
    trends = compute_trends(evaluations)

    # 75% of the grade lost, 50 points needed from the last 25%
    assert trends.required_trend == 200


def test_required_trend_zero_once_midpoint_secured():
    evaluations = [CompletedEvaluation(name="Exam", score=10, total=10), PendingEvaluation(name="Final", total=10)]
    assert compute_trends(evaluations).required_trend == 0


def test_required_trend_for_top_grade(half_graded):
    assert compute_required_trend(half_graded, 90) == pytest.approx(130)


def test_required_trend_without_grades():
    assert compute_required_trend([], 90) == 90
    assert compute_required_trend([PendingEvaluation(name="Final", total=10)], 75) == 75


def test_required_trend_target_already_exceeded(fully_graded):
    assert compute_required_trend(fully_graded, 80) == 0
    assert compute_required_trend(fully_graded, 95) == 0


def test_required_trend_never_negative(mixed_class):
    for target in (0, 10, 17, 50, 90, 100):
        assert compute_required_trend(mixed_class, target) >= 0


def test_accumulation_logged(caplog, half_graded):
    caplog.set_level(logging.DEBUG, logger="grade_trends.trend_logic")
    compute_trends(half_graded)
    assert "Total possible points: 20" in caplog.text
