"""Prediction accuracy against recorded outcomes.

Each outcome is joined to the prediction it refers to (``prediction_id``
against the prediction ``id``). Every key of the prediction's score map is
then evaluated against the outcome payload value under the same key.

This evaluation is not part of the default statistics report; callers
invoke it separately when they want accuracy figures.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cohortstats.config.loader import get_config
from cohortstats.core.errors import NoRecordsError
from cohortstats.metrics.confusion import ConfusionMatrix, evaluate

logger = logging.getLogger(__name__)

__all__ = ["AccuracyReport", "collect_pairs", "evaluate_accuracy"]

ID_FIELD = "id"
PREDICTION_FIELD = "prediction"
PREDICTION_ID_FIELD = "prediction_id"
PAYLOAD_FIELD = "payload"


class AccuracyReport(BaseModel):
    """Confusion matrices per prediction target."""

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(..., description="Score above which a prediction is positive")
    matched_outcomes: int = Field(..., ge=0, description="Outcomes joined to a prediction")
    unmatched_outcomes: int = Field(default=0, ge=0, description="Outcomes with no prediction")
    targets: dict[str, ConfusionMatrix] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable mapping."""
        return self.model_dump(mode="json")


def _as_score(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        score = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return score if math.isfinite(score) else None


def _as_label(value: Any) -> int | None:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def collect_pairs(
    predictions: Sequence[dict[str, Any]],
    outcomes: Sequence[dict[str, Any]],
) -> tuple[dict[str, tuple[list[float], list[int]]], int]:
    """Align prediction scores with outcome labels per target key.

    Args:
        predictions: Decoded prediction records with ``id`` and ``prediction``.
        outcomes: Decoded outcome records with ``prediction_id`` and ``payload``.

    Returns:
        Tuple of (mapping of key to (scores, labels), number of outcomes
        with no matching prediction).

    """
    by_id = {record.get(ID_FIELD): record for record in predictions if isinstance(record, dict)}
    pairs: dict[str, tuple[list[float], list[int]]] = {}
    unmatched = 0
    skipped = 0

    for outcome in outcomes:
        prediction = by_id.get(outcome.get(PREDICTION_ID_FIELD))
        scores = prediction.get(PREDICTION_FIELD) if prediction else None
        if not isinstance(scores, dict):
            unmatched += 1
            continue

        payload = outcome.get(PAYLOAD_FIELD)
        if not isinstance(payload, dict):
            payload = {}
        for key, raw_score in scores.items():
            score = _as_score(raw_score)
            label = _as_label(payload.get(key))
            if score is None or label is None:
                skipped += 1
                continue
            target_scores, target_labels = pairs.setdefault(key, ([], []))
            target_scores.append(score)
            target_labels.append(label)

    if unmatched:
        logger.warning(f"{unmatched} outcome(s) have no matching prediction")
    if skipped:
        logger.warning(f"Skipped {skipped} score/outcome pair(s) with missing values")
    return pairs, unmatched


def evaluate_accuracy(
    predictions: Sequence[dict[str, Any]],
    outcomes: Sequence[dict[str, Any]],
    threshold: float | None = None,
) -> AccuracyReport:
    """Evaluate prediction scores against recorded outcomes.

    Args:
        predictions: Decoded prediction records.
        outcomes: Decoded outcome records.
        threshold: Positive-class threshold (defaults to the configured value).

    Returns:
        AccuracyReport with one confusion matrix per target key.

    Raises:
        NoRecordsError: If either batch is empty.

    """
    if not predictions:
        raise NoRecordsError("No predictions to evaluate")
    if not outcomes:
        raise NoRecordsError("No outcomes to evaluate")
    if threshold is None:
        threshold = get_config().report.positive_threshold

    pairs, unmatched = collect_pairs(predictions, outcomes)
    targets = {
        key: evaluate(scores, labels, threshold) for key, (scores, labels) in pairs.items()
    }
    return AccuracyReport(
        threshold=threshold,
        matched_outcomes=len(outcomes) - unmatched,
        unmatched_outcomes=unmatched,
        targets=targets,
    )
