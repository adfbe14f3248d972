import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from grade_trends.logging_config import get_logger

logger = get_logger(__name__)


# ------------------------
# Evaluation records
# ------------------------
@dataclass(frozen=True)
class CompletedEvaluation:
    """A graded item: `score` out of `total` points."""
    name: str
    score: float
    total: float

    @property
    def percentage(self) -> float:
        return (self.score / self.total) * 100


@dataclass(frozen=True)
class PendingEvaluation:
    """An item that counts towards the class weighting but has no score yet."""
    name: str
    total: float

    @property
    def score(self) -> None:
        return None

    @property
    def percentage(self) -> None:
        return None


Evaluation = Union[CompletedEvaluation, PendingEvaluation]
ClassEvaluationSet = List[Evaluation]

# Score cells that mean "not graded yet"
PENDING_MARKERS = {"-", ""}


# ------------------------
# Raw text -> records
# ------------------------
# Leading number of a cell; trailing text such as "%", " pts" or ",5" is ignored
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_number(text) -> Optional[float]:
    match = _LEADING_NUMBER.match("" if text is None else str(text))
    if match is None:
        return None
    value = float(match.group(1))
    if not np.isfinite(value):
        return None
    return value


def parse_score(score_text, total_text) -> Optional[Tuple[float, float, float]]:
    """
    Parse the score and total cells of one evaluation.

    Returns (score, total, percentage), or None when the evaluation is not
    graded ('-' or blank) or either cell is unusable.
    """
    score_text = "" if score_text is None else str(score_text).strip()
    total_text = "" if total_text is None else str(total_text).strip()

    if score_text in PENDING_MARKERS:
        logger.debug("Skipping incomplete evaluation (score=%r)", score_text)
        return None

    score = _to_number(score_text)
    total = _to_number(total_text)
    # Negative totals are dropped too, not only zero
    if score is None or total is None or total <= 0:
        logger.debug("Invalid score or total: %r / %r", score_text, total_text)
        return None

    return score, total, (score / total) * 100


def evaluation_name(subtitle: Optional[str], labels: Sequence[Optional[str]] = ()) -> str:
    """
    Build a display name from an optional subtitle and the label texts of an
    evaluation; the last non-empty label wins.
    """
    subtitle = (subtitle or "").strip()

    name = ""
    for label in reversed(labels):
        text = (label or "").strip()
        if text:
            name = text
            break

    if subtitle and name:
        return f"{subtitle} - {name}"
    return name or subtitle or "Unknown"


def normalize_evaluation(name: str, score_text, total_text) -> Optional[Evaluation]:
    """
    Turn one raw (name, score, total) triple into a record.

    Ungraded items keep their total so they still count towards the class
    weighting; items without a positive total are dropped.
    """
    parsed = parse_score(score_text, total_text)
    if parsed is not None:
        score, total, _ = parsed
        return CompletedEvaluation(name=name, score=score, total=total)

    total = _to_number(total_text)
    if total is not None and total > 0:
        return PendingEvaluation(name=name, total=total)

    logger.debug("Dropping evaluation %r without a positive total", name)
    return None


def normalize_class(rows: Iterable[Tuple[str, object, object]]) -> ClassEvaluationSet:
    """rows: (name, score_text, total_text) in document order."""
    evaluations: ClassEvaluationSet = []
    for name, score_text, total_text in rows:
        record = normalize_evaluation(name, score_text, total_text)
        if record is not None:
            evaluations.append(record)
    return evaluations


def is_completed(evaluation: Evaluation) -> bool:
    return isinstance(evaluation, CompletedEvaluation)
