"""Statistics report builder for a cohort of predictions and outcomes.

The report is one flat mapping: ``total`` and ``perMonth`` at the top
level, then one entry per reported feature. Categoric and dichotomous
features map straight to their frequency table. Numeric features nest the
table under ``counts`` next to a numeric summary under ``stats``, so a raw
value of ``"stats"`` can never shadow the summary.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cohortstats.config.loader import get_config
from cohortstats.config.models import ReportSettings
from cohortstats.config.schema import (
    FEATURE_SCHEMA,
    FeatureKind,
    FeatureSchema,
    FeatureSpec,
    RecordSource,
)
from cohortstats.core.dates import to_datetime
from cohortstats.core.errors import MalformedRecordError, NoRecordsError
from cohortstats.metrics.frequency import count_values, top_n
from cohortstats.metrics.statistics import NumericSummary, numeric_values, summarize

logger = logging.getLogger(__name__)

__all__ = [
    "FeatureReport",
    "StatisticsReport",
    "build_report",
    "count_per_month",
    "feature_values",
    "month_key",
    "summarize_feature",
]

PAYLOAD_FIELD = "payload"
DATE_FIELD = "date"


class FeatureReport(BaseModel):
    """Aggregated view of a single feature.

    Attributes:
        kind: Aggregation strategy used.
        counts: Frequency table of raw values (top-N for non-numeric features).
        stats: Numeric summary for numeric features; None otherwise, or when
            the feature has no numeric observations.

    """

    model_config = ConfigDict(frozen=True)

    kind: FeatureKind
    counts: dict[str, int] = Field(default_factory=dict)
    stats: NumericSummary | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the feature's wire shape.

        Returns:
            The bare frequency table for categoric and dichotomous features;
            ``{"counts": ..., "stats": ...}`` for numeric features.

        """
        if self.kind is not FeatureKind.NUMERIC:
            return dict(self.counts)
        stats = self.stats.model_dump(by_alias=True) if self.stats else None
        return {"counts": dict(self.counts), "stats": stats}


class StatisticsReport(BaseModel):
    """Cohort statistics report.

    Attributes:
        total: Number of prediction records.
        per_month: Prediction counts keyed by ``"<year>-<zero-indexed month>"``.
        features: Per-feature results in schema order.

    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(..., ge=0)
    per_month: dict[str, int] = Field(default_factory=dict)
    features: dict[str, FeatureReport] = Field(default_factory=dict)

    def __getitem__(self, name: str) -> FeatureReport:
        return self.features[name]

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the report's wire shape."""
        result: dict[str, Any] = {"total": self.total, "perMonth": dict(self.per_month)}
        for name, feature in self.features.items():
            result[name] = feature.to_dict()
        return result

    def to_json(self, indent: int | None = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def _payload(record: dict[str, Any], index: int, source: RecordSource) -> dict[str, Any]:
    payload = record.get(PAYLOAD_FIELD) if isinstance(record, dict) else None
    if not isinstance(payload, dict):
        raise MalformedRecordError(
            f"{source.value} record {index} has no {PAYLOAD_FIELD!r} mapping"
        )
    return payload


def feature_values(
    records: Sequence[dict[str, Any]],
    feature: str,
    source: RecordSource = RecordSource.PREDICTION,
) -> list[Any]:
    """Collect one feature's value from every record's payload.

    Records whose payload lacks the feature contribute None.

    Raises:
        MalformedRecordError: If a record has no payload mapping.

    """
    return [_payload(record, i, source).get(feature) for i, record in enumerate(records)]


def month_key(timestamp_ms: float) -> str:
    """Build the ``"<year>-<month>"`` bucket for a timestamp.

    Months are zero-indexed (January is 0) and computed in UTC.
    """
    moment = to_datetime(timestamp_ms)
    return f"{moment.year}-{moment.month - 1}"


def _timestamp(record: dict[str, Any], index: int) -> float:
    value = record.get(DATE_FIELD) if isinstance(record, dict) else None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            value = None
    usable = isinstance(value, (int, float)) and not isinstance(value, bool)
    if usable:
        try:
            usable = math.isfinite(value)
        except OverflowError:
            usable = False
    if not usable:
        raise MalformedRecordError(f"prediction record {index} has no usable {DATE_FIELD!r}")
    return value


def count_per_month(predictions: Sequence[dict[str, Any]]) -> dict[str, int]:
    """Count predictions per calendar month.

    Raises:
        MalformedRecordError: If a prediction has no numeric timestamp.

    """
    keys: list[str] = []
    for i, record in enumerate(predictions):
        timestamp = _timestamp(record, i)
        try:
            keys.append(month_key(timestamp))
        except (OverflowError, OSError, ValueError) as e:
            raise MalformedRecordError(f"prediction record {i} has an out-of-range date: {e}")
    return count_values(keys)


def summarize_feature(
    spec: FeatureSpec,
    records: Sequence[dict[str, Any]],
    settings: ReportSettings,
) -> FeatureReport:
    """Aggregate one feature across a batch of records.

    Numeric features keep the full frequency table and gain a numeric
    summary. Other features keep only the ``settings.top_n`` most frequent
    values.
    """
    values = feature_values(records, spec.name, spec.source)
    counts = count_values(values)

    if spec.kind is not FeatureKind.NUMERIC:
        return FeatureReport(kind=spec.kind, counts=top_n(counts, settings.top_n))

    numbers = numeric_values(values)
    stats: NumericSummary | None = None
    if numbers:
        stats = summarize(numbers)
    else:
        logger.warning(f"Feature {spec.name!r} has no numeric values; summary is undefined")
    return FeatureReport(kind=spec.kind, counts=counts, stats=stats)


def build_report(
    predictions: Sequence[dict[str, Any]],
    outcomes: Sequence[dict[str, Any]],
    schema: FeatureSchema = FEATURE_SCHEMA,
    settings: ReportSettings | None = None,
) -> StatisticsReport:
    """Build the statistics report for decoded predictions and outcomes.

    Args:
        predictions: Decoded prediction records (``date`` and ``payload`` fields).
        outcomes: Decoded outcome records (``payload`` field).
        schema: Feature classification driving the aggregation.
        settings: Report settings (defaults to the packaged configuration).

    Returns:
        StatisticsReport covering every reported feature in ``schema``.

    Raises:
        NoRecordsError: If either batch is empty.
        MalformedRecordError: If a record lacks its payload or date.

    """
    if not predictions:
        raise NoRecordsError("No predictions to analyze")
    if not outcomes:
        raise NoRecordsError("No outcomes to analyze")
    if settings is None:
        settings = get_config().report

    batches = {RecordSource.PREDICTION: predictions, RecordSource.OUTCOME: outcomes}
    features = {
        spec.name: summarize_feature(spec, batches[spec.source], settings)
        for spec in schema.reported()
    }

    logger.info(
        f"Built report over {len(predictions)} predictions and {len(outcomes)} outcomes "
        f"({len(features)} features)"
    )
    return StatisticsReport(
        total=len(predictions),
        per_month=count_per_month(predictions),
        features=features,
    )
