from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from grade_trends.evaluations import CompletedEvaluation, Evaluation, is_completed
from grade_trends.logging_config import get_logger

logger = get_logger(__name__)

# Cumulative grade the plain trend is measured against
MIDPOINT = 50.0


@dataclass(frozen=True)
class CumulativePoint:
    x: float  # share of the final grade evaluated so far (0-100)
    y: float  # share of the final grade earned so far (0-100)
    evaluation: CompletedEvaluation


@dataclass
class TrendResult:
    current_trend: float
    required_trend: float
    remaining_percentage: float
    cumulative_points: List[CumulativePoint]
    evaluations: Sequence[Evaluation]
    cumulative_grade_earned: float = 0.0
    cumulative_grade_available: float = 0.0


# ------------------------
# Core logic
# ------------------------
def _weighted_progression(
    evaluations: Sequence[Evaluation],
) -> Optional[Tuple[List[CompletedEvaluation], np.ndarray, np.ndarray]]:
    """
    Running (available, earned) grade shares over the completed evaluations,
    in their original order.

    Every evaluation, graded or not, counts towards the class's total possible
    points, so an item's weight is its share of everything planned.
    Returns None when there is nothing to accumulate: no completed
    evaluations, or no positive total to weight against.
    """
    completed = [e for e in evaluations if is_completed(e)]
    if not completed:
        return None

    total_possible_points = sum(float(e.total) for e in evaluations)
    if total_possible_points <= 0:
        logger.debug("Total possible points is %s, no computable trend", total_possible_points)
        return None

    totals = np.array([e.total for e in completed], dtype=float)
    scores = np.array([e.score for e in completed], dtype=float)

    weights = (totals / total_possible_points) * 100
    earned = (scores / totals) * weights

    available = np.cumsum(weights)
    earned_so_far = np.cumsum(earned)

    logger.debug(
        "Total possible points: %s, completed evaluations: %d, total evaluations: %d",
        total_possible_points, len(completed), len(evaluations),
    )
    for i, (e, w, x) in enumerate(zip(completed, weights, available)):
        logger.debug("Eval %d: %gpts (%.1f%%), cumulative_available=%.1f%%", i, e.total, w, x)

    return completed, available, earned_so_far


def _required_rate(earned: float, available: float, target: float) -> float:
    """Average rate needed on the remaining weight to finish at `target`."""
    remaining = 100 - available
    needed = target - earned

    required = 0.0
    if remaining > 0 and needed > 0:
        required = (needed / remaining) * 100
    # Target already secured
    if earned >= target:
        required = 0.0
    return required


def compute_trends(evaluations: Sequence[Evaluation]) -> TrendResult:
    """
    Cumulative progression of one class.

    With nothing graded yet the trend is flat zero and the full midpoint is
    still required.
    """
    progression = _weighted_progression(evaluations)
    if progression is None:
        return TrendResult(
            current_trend=0.0,
            required_trend=MIDPOINT,
            remaining_percentage=100.0,
            cumulative_points=[],
            evaluations=evaluations,
        )

    completed, available, earned = progression
    points = [
        CumulativePoint(x=float(x), y=float(y), evaluation=e)
        for e, x, y in zip(completed, available, earned)
    ]

    cumulative_grade_available = float(available[-1])
    cumulative_grade_earned = float(earned[-1])

    current_trend = 0.0
    if cumulative_grade_available > 0:
        current_trend = (cumulative_grade_earned / cumulative_grade_available) * 100

    result = TrendResult(
        current_trend=current_trend,
        required_trend=_required_rate(cumulative_grade_earned, cumulative_grade_available, MIDPOINT),
        remaining_percentage=100 - cumulative_grade_available,
        cumulative_points=points,
        evaluations=evaluations,
        cumulative_grade_earned=cumulative_grade_earned,
        cumulative_grade_available=cumulative_grade_available,
    )
    logger.debug("Calculated trends: current=%.2f required=%.2f remaining=%.2f",
                 result.current_trend, result.required_trend, result.remaining_percentage)
    return result


def compute_required_trend(evaluations: Sequence[Evaluation], target_percentage: float) -> float:
    """
    Average rate needed on the ungraded work to finish the class at
    `target_percentage` (e.g. 90 for a top grade).

    0 means the target is already secured; values above 100 mean it is out of
    reach. With nothing graded the whole target is still required.
    """
    progression = _weighted_progression(evaluations)
    if progression is None:
        return target_percentage

    _, available, earned = progression
    return _required_rate(float(earned[-1]), float(available[-1]), target_percentage)
