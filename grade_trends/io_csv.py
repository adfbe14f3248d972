import pandas as pd
from typing import Dict

from grade_trends.evaluations import ClassEvaluationSet, evaluation_name, normalize_evaluation
from grade_trends.logging_config import get_logger

logger = get_logger(__name__)

# ------------------------
# CSV helpers
# ------------------------

COLUMN_ALIASES = {
    "course": "class",
    "evaluation": "name",
    "points": "score",
    "out of": "total",
    "max": "total",
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {}
    for alias, column in COLUMN_ALIASES.items():
        # First alias found wins; later ones for the same column are left as-is
        if alias in df.columns and column not in df.columns and column not in renames.values():
            renames[alias] = column
    if renames:
        df = df.rename(columns=renames)
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    # Cells stay text so '-' and blanks survive as pending markers
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    return _normalise_cols(df)


def validate_evaluations_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"class", "score", "total"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Class, Score, Total.")
    out = df.copy()
    for optional in ("name", "subtitle"):
        if optional not in out.columns:
            out[optional] = ""
    return out[["class", "subtitle", "name", "score", "total"]]


def _cell(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def parse_classes(df: pd.DataFrame) -> Dict[str, ClassEvaluationSet]:
    """
    Group evaluation rows by class, keeping document order both for the
    classes and for the evaluations inside each class.
    """
    classes: Dict[str, ClassEvaluationSet] = {}
    for _, row in df.iterrows():
        class_name = _cell(row.get("class"))
        if not class_name:
            logger.debug("Skipping row without a class: %s", dict(row))
            continue

        name = evaluation_name(_cell(row.get("subtitle")), [_cell(row.get("name"))])
        record = normalize_evaluation(name, _cell(row.get("score")), _cell(row.get("total")))

        evaluations = classes.setdefault(class_name, [])
        if record is not None:
            evaluations.append(record)

    for class_name, evaluations in classes.items():
        completed = sum(1 for e in evaluations if e.score is not None)
        logger.debug("Class %s has %d completed evaluations out of %d total evaluations",
                     class_name, completed, len(evaluations))
    return classes


def load_classes(uploaded_file) -> Dict[str, ClassEvaluationSet]:
    return parse_classes(validate_evaluations_csv(read_csv_upload(uploaded_file)))
