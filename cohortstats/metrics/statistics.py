"""Numeric summaries for numeric features.

Quartiles use a nearest-rank estimator on the ascending-sorted values
rather than interpolation, so results are reproducible index lookups:

    Q1     = s[floor((n - 1) / 4)]
    Q3     = s[floor(3 * (n - 1) / 4)]
    median = (s[floor((n - 1) / 2)] + s[ceil((n - 1) / 2)]) / 2
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from cohortstats.core.errors import UndefinedSummaryError

logger = logging.getLogger(__name__)

__all__ = [
    "NumericSummary",
    "calculate_mean",
    "calculate_median",
    "calculate_quartiles",
    "numeric_values",
    "sample_std_dev",
    "summarize",
]


class NumericSummary(BaseModel):
    """Statistical summary of a numeric feature.

    Attributes:
        count: Number of observations.
        mean: Arithmetic mean.
        std_dev: Sample standard deviation (n - 1 denominator), or None when
            fewer than two observations make it undefined.
        median: Middle value, averaging the two middle values for even counts.
        q1: First quartile (nearest rank).
        q3: Third quartile (nearest rank).
        iqr: Interquartile range, q3 - q1.

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    count: int = Field(..., ge=1, description="Number of observations")
    mean: float = Field(..., description="Arithmetic mean")
    std_dev: float | None = Field(
        default=None, serialization_alias="sampleStdDev", description="Sample standard deviation"
    )
    median: float = Field(..., description="Median value")
    q1: float = Field(..., description="First quartile")
    q3: float = Field(..., description="Third quartile")
    iqr: float = Field(..., description="Interquartile range")

    @property
    def has_std_dev(self) -> bool:
        """Whether the sample standard deviation is defined."""
        return self.std_dev is not None


def _as_array(values: Sequence[float]) -> np.ndarray:
    if len(values) == 0:
        raise UndefinedSummaryError("Cannot summarize an empty sequence")
    return np.asarray(values, dtype=float)


def calculate_mean(values: Sequence[float]) -> float:
    """Calculate the arithmetic mean.

    Raises:
        UndefinedSummaryError: If ``values`` is empty.

    """
    return float(np.mean(_as_array(values)))


def sample_std_dev(values: Sequence[float]) -> float:
    """Calculate the sample standard deviation (Bessel's correction).

    Args:
        values: Numeric observations.

    Returns:
        Standard deviation with an n - 1 denominator.

    Raises:
        UndefinedSummaryError: If fewer than two values are given.

    """
    if len(values) < 2:
        raise UndefinedSummaryError(
            f"Sample standard deviation needs at least 2 observations, got {len(values)}"
        )
    return float(np.std(np.asarray(values, dtype=float), ddof=1))


def calculate_median(values: Sequence[float]) -> float:
    """Calculate the median of the values.

    For an odd count this is the middle value; for an even count, the
    average of the two middle values.
    """
    ordered = np.sort(_as_array(values))
    last = len(ordered) - 1
    return float((ordered[math.floor(last / 2)] + ordered[math.ceil(last / 2)]) / 2)


def calculate_quartiles(values: Sequence[float]) -> tuple[float, float]:
    """Calculate (Q1, Q3) with the nearest-rank estimator."""
    ordered = np.sort(_as_array(values))
    last = len(ordered) - 1
    q1 = ordered[math.floor(last / 4)]
    q3 = ordered[math.floor(last * 3 / 4)]
    return float(q1), float(q3)


def summarize(values: Sequence[float]) -> NumericSummary:
    """Compute mean, sample standard deviation, median and IQR.

    A single observation yields a summary whose ``std_dev`` is None rather
    than a NaN or a division-by-zero artifact.

    Args:
        values: Numeric observations, in any order.

    Returns:
        NumericSummary for the values.

    Raises:
        UndefinedSummaryError: If ``values`` is empty.

    """
    if len(values) == 0:
        raise UndefinedSummaryError("Cannot summarize an empty sequence")

    std_dev: float | None = None
    if len(values) >= 2:
        std_dev = sample_std_dev(values)
    else:
        logger.debug("Sample standard deviation undefined for a single observation")

    q1, q3 = calculate_quartiles(values)
    return NumericSummary(
        count=len(values),
        mean=calculate_mean(values),
        std_dev=std_dev,
        median=calculate_median(values),
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
    )


def numeric_values(values: Iterable[Any]) -> list[float]:
    """Keep the values usable as numbers.

    Numbers pass through and numeric strings are parsed. Missing values,
    booleans, non-numeric text and non-finite numbers are dropped.
    """
    result: list[float] = []
    dropped = 0
    for value in values:
        if isinstance(value, bool) or value is None:
            dropped += 1
            continue
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                dropped += 1
                continue
        if not isinstance(value, (int, float)):
            dropped += 1
            continue
        try:
            number = float(value)
        except OverflowError:
            dropped += 1
            continue
        if not math.isfinite(number):
            dropped += 1
            continue
        result.append(number)

    if dropped:
        logger.warning(f"Dropped {dropped} non-numeric value(s) from numeric summary")
    return result
