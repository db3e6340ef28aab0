"""End-to-end entry point: raw store records in, statistics report out.

The caller is responsible for querying the store and for turning any
:class:`~cohortstats.core.errors.CohortStatsError` into a user-facing
failure. Nothing here retries; any error aborts the whole report.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cohortstats.config.loader import get_config
from cohortstats.config.models import CohortStatsConfig
from cohortstats.config.schema import FEATURE_SCHEMA, FeatureSchema
from cohortstats.decoding.validation import validate_records
from cohortstats.reporting.report import StatisticsReport, build_report

__all__ = ["generate_report"]


def generate_report(
    raw_predictions: Sequence[dict[str, Any]] | None,
    raw_outcomes: Sequence[dict[str, Any]] | None,
    config: CohortStatsConfig | None = None,
    schema: FeatureSchema = FEATURE_SCHEMA,
) -> StatisticsReport:
    """Validate and decode both batches, then build the report.

    Args:
        raw_predictions: Prediction records in wire format.
        raw_outcomes: Outcome records in wire format.
        config: Configuration (defaults to the packaged configuration).
        schema: Feature classification driving the aggregation.

    Returns:
        StatisticsReport for the cohort.

    Raises:
        NoRecordsError: If either batch is absent or empty.
        MalformedRecordError: If a decoded record lacks its payload or date.

    """
    if config is None:
        config = get_config()

    predictions = validate_records(raw_predictions, "predictions")
    outcomes = validate_records(raw_outcomes, "outcomes")
    return build_report(predictions, outcomes, schema=schema, settings=config.report)
