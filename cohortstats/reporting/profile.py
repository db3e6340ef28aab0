"""Descriptive cohort profile of prediction payloads.

The profile is an optional companion to the statistics report. For each
prediction feature in the schema it reports:

- dichotomous features: how many records carry the value 1, as an
  absolute count and as a share of all records;
- categoric features: absolute and relative frequency of every distinct
  value, in first-seen order;
- numeric features: the numeric summary.

It is not part of the default report and must be requested explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from cohortstats.config.loader import get_config
from cohortstats.config.models import ReportSettings
from cohortstats.config.schema import FEATURE_SCHEMA, FeatureKind, FeatureSchema, RecordSource
from cohortstats.core.errors import NoRecordsError
from cohortstats.metrics.frequency import format_key
from cohortstats.metrics.statistics import NumericSummary, numeric_values, summarize
from cohortstats.reporting.report import feature_values

logger = logging.getLogger(__name__)

__all__ = [
    "CategoricFrequency",
    "CohortProfile",
    "DichotomousFrequency",
    "build_profile",
    "payload_frame",
]


class DichotomousFrequency(BaseModel):
    """Presence count for a binary feature."""

    model_config = ConfigDict(frozen=True)

    abs_frequency: int = Field(..., ge=0, description="Records with value 1")
    rel_frequency: float = Field(..., ge=0.0, le=1.0, description="Share of records with value 1")
    total: int = Field(..., ge=0, description="Records considered")


class CategoricFrequency(BaseModel):
    """Per-value frequencies for a categoric feature."""

    model_config = ConfigDict(frozen=True)

    abs_frequency: dict[str, int] = Field(default_factory=dict)
    rel_frequency: dict[str, float] = Field(default_factory=dict)
    total: int = Field(..., ge=0, description="Records considered")


class CohortProfile(BaseModel):
    """Descriptive profile of a prediction cohort."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(..., ge=0, description="Number of prediction records")
    dichotomous: dict[str, DichotomousFrequency] = Field(default_factory=dict)
    categoric: dict[str, CategoricFrequency] = Field(default_factory=dict)
    descriptive: dict[str, NumericSummary | None] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable mapping."""
        return self.model_dump(mode="json", by_alias=True)


def payload_frame(
    predictions: Sequence[dict[str, Any]],
    schema: FeatureSchema = FEATURE_SCHEMA,
) -> pd.DataFrame:
    """Build a DataFrame with one column per prediction feature.

    Values are kept as Python objects; features missing from a payload
    appear as None.
    """
    columns = {
        name: feature_values(predictions, name)
        for name in schema.names(source=RecordSource.PREDICTION)
    }
    return pd.DataFrame(columns, dtype=object)


def _dichotomous(column: pd.Series, precision: int) -> DichotomousFrequency:
    present = int((pd.to_numeric(column, errors="coerce") == 1).sum())
    total = len(column)
    return DichotomousFrequency(
        abs_frequency=present,
        rel_frequency=round(present / total, precision) if total else 0.0,
        total=total,
    )


def _categoric(column: pd.Series, precision: int) -> CategoricFrequency:
    keys = column.map(format_key)
    counts = keys.value_counts()
    total = len(keys)
    order = pd.unique(keys)
    return CategoricFrequency(
        abs_frequency={key: int(counts[key]) for key in order},
        rel_frequency={key: round(int(counts[key]) / total, precision) for key in order},
        total=total,
    )


def build_profile(
    predictions: Sequence[dict[str, Any]],
    schema: FeatureSchema = FEATURE_SCHEMA,
    settings: ReportSettings | None = None,
) -> CohortProfile:
    """Profile the prediction payloads of a cohort.

    Args:
        predictions: Decoded prediction records.
        schema: Feature classification.
        settings: Report settings (for relative-frequency precision).

    Returns:
        CohortProfile over every prediction feature in ``schema``.

    Raises:
        NoRecordsError: If there are no predictions.
        MalformedRecordError: If a record has no payload mapping.

    """
    if not predictions:
        raise NoRecordsError("No predictions to profile")
    if settings is None:
        settings = get_config().report

    frame = payload_frame(predictions, schema)
    precision = settings.relative_precision

    dichotomous: dict[str, DichotomousFrequency] = {}
    categoric: dict[str, CategoricFrequency] = {}
    descriptive: dict[str, NumericSummary | None] = {}
    for spec in schema.for_source(RecordSource.PREDICTION):
        column = frame[spec.name]
        if spec.kind is FeatureKind.DICHOTOMOUS:
            dichotomous[spec.name] = _dichotomous(column, precision)
        elif spec.kind is FeatureKind.CATEGORIC:
            categoric[spec.name] = _categoric(column, precision)
        else:
            numbers = numeric_values(column.tolist())
            descriptive[spec.name] = summarize(numbers) if numbers else None

    logger.debug(f"Profiled {len(frame)} predictions across {len(frame.columns)} features")
    return CohortProfile(
        total=len(frame),
        dichotomous=dichotomous,
        categoric=categoric,
        descriptive=descriptive,
    )
