from typing import Dict, Mapping, Optional

import pandas as pd

from grade_trends.config import settings
from grade_trends.evaluations import ClassEvaluationSet, is_completed
from grade_trends.logging_config import get_logger
from grade_trends.trend_logic import TrendResult, compute_required_trend, compute_trends

logger = get_logger(__name__)

SUMMARY_COLUMNS = [
    "class",
    "completed",
    "evaluations",
    "current_trend",
    "required_for_pass",
    "required_for_top",
    "remaining",
    "current_status",
    "pass_status",
    "top_status",
]


def analyze_classes(classes: Mapping[str, ClassEvaluationSet]) -> Dict[str, TrendResult]:
    """Trend results per class; classes without any evaluation are left out."""
    results: Dict[str, TrendResult] = {}
    for class_name, evaluations in classes.items():
        if len(evaluations) == 0:
            logger.info("Skipping %s - no evaluations", class_name)
            continue
        results[class_name] = compute_trends(evaluations)

    logger.info("Computed trends for %d of %d classes", len(results), len(classes))
    return results


def trend_status(value: float, kind: str = "required", passing: Optional[float] = None) -> str:
    """
    Rate a trend figure as 'positive', 'neutral' or 'negative'.

    kind='current': at or above the passing target is positive.
    kind='required': 0 (already secured) is positive, anything reachable with
    at most full marks is neutral, above 100 is negative.
    """
    if kind == "current":
        passing = settings.passing_target if passing is None else passing
        return "positive" if value >= passing else "negative"
    if kind != "required":
        raise ValueError(f"Unknown trend kind: {kind!r}")

    if value == 0:
        return "positive"
    if value <= 100:
        return "neutral"
    return "negative"


def summarize_classes(classes: Mapping[str, ClassEvaluationSet]) -> pd.DataFrame:
    """One row per analysed class with the figures a trend panel shows."""
    rows = []
    for class_name, result in analyze_classes(classes).items():
        evaluations = result.evaluations
        required_for_pass = compute_required_trend(evaluations, settings.passing_target)
        required_for_top = compute_required_trend(evaluations, settings.top_target)

        rows.append({
            "class": class_name,
            "completed": sum(1 for e in evaluations if is_completed(e)),
            "evaluations": len(evaluations),
            "current_trend": result.current_trend,
            "required_for_pass": required_for_pass,
            "required_for_top": required_for_top,
            "remaining": result.remaining_percentage,
            "current_status": trend_status(result.current_trend, "current"),
            "pass_status": trend_status(required_for_pass),
            "top_status": trend_status(required_for_top),
        })

    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def cumulative_points_frame(result: TrendResult) -> pd.DataFrame:
    """The cumulative curve as a table, ready for a plotting library."""
    return pd.DataFrame(
        [
            {
                "x": p.x,
                "y": p.y,
                "name": p.evaluation.name,
                "score": p.evaluation.score,
                "total": p.evaluation.total,
                "percentage": p.evaluation.percentage,
            }
            for p in result.cumulative_points
        ],
        columns=["x", "y", "name", "score", "total", "percentage"],
    )
