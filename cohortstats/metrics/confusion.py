"""Confusion matrix evaluation of prediction scores against outcomes.

Scores are continuous probabilities; a score strictly above the threshold
classifies as positive (1), anything else as negative (0). Actual outcomes
are binary labels.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from cohortstats.core.errors import NoRecordsError

__all__ = [
    "DEFAULT_THRESHOLD",
    "ConfusionMatrix",
    "classify_scores",
    "evaluate",
    "split_by_threshold",
]

DEFAULT_THRESHOLD = 0.6


class ConfusionMatrix(BaseModel):
    """Classification accuracy counts for one prediction target."""

    model_config = ConfigDict(frozen=True)

    total_calculated: int = Field(..., ge=0, description="Number of scored predictions")
    success_predicted: int = Field(..., ge=0, description="Predictions matching the outcome")
    success_percentage: str = Field(..., description="Share of matches, e.g. '66.67 %'")
    TP: int = Field(default=0, ge=0, description="True positives")
    FP: int = Field(default=0, ge=0, description="False positives")
    TN: int = Field(default=0, ge=0, description="True negatives")
    FN: int = Field(default=0, ge=0, description="False negatives")

    @property
    def accuracy(self) -> float:
        """Fraction of predictions that matched the outcome."""
        if self.total_calculated == 0:
            return 0.0
        return self.success_predicted / self.total_calculated


def classify_scores(scores: Sequence[float], threshold: float = DEFAULT_THRESHOLD) -> list[int]:
    """Map each score to 1 when above the threshold, else 0."""
    return [1 if score > threshold else 0 for score in scores]


def split_by_threshold(
    scores: Sequence[float], threshold: float = DEFAULT_THRESHOLD
) -> tuple[list[float], list[float]]:
    """Partition scores into (positive, negative) lists."""
    positive = [score for score in scores if score > threshold]
    negative = [score for score in scores if score <= threshold]
    return positive, negative


def evaluate(
    scores: Sequence[float],
    actual: Sequence[int],
    threshold: float = DEFAULT_THRESHOLD,
) -> ConfusionMatrix:
    """Compute the 2x2 contingency counts for scored predictions.

    Args:
        scores: Predicted probabilities.
        actual: Observed binary outcomes (0 or 1), aligned with ``scores``.
        threshold: Score above which a prediction is positive.

    Returns:
        ConfusionMatrix with TP/FP/TN/FN and the success percentage.

    Raises:
        NoRecordsError: If there are no scores to evaluate.
        ValueError: If ``scores`` and ``actual`` differ in length.

    """
    if len(scores) == 0:
        raise NoRecordsError("No predictions to evaluate")
    if len(scores) != len(actual):
        raise ValueError(
            f"Scores and outcomes must align: got {len(scores)} scores, {len(actual)} outcomes"
        )

    tp = fp = tn = fn = 0
    for predicted, observed in zip(classify_scores(scores, threshold), actual):
        if predicted == observed:
            if observed == 1:
                tp += 1
            else:
                tn += 1
        elif observed == 1:
            fn += 1
        else:
            fp += 1

    total = len(scores)
    matched = tp + tn
    return ConfusionMatrix(
        total_calculated=total,
        success_predicted=matched,
        success_percentage=f"{matched / total * 100:.2f} %",
        TP=tp,
        FP=fp,
        TN=tn,
        FN=fn,
    )
