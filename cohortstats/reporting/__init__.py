"""Reporting module for cohort statistics.

Provides the default statistics report plus the optional cohort profile
and accuracy evaluation.
"""

from cohortstats.reporting.accuracy import AccuracyReport, collect_pairs, evaluate_accuracy
from cohortstats.reporting.profile import (
    CategoricFrequency,
    CohortProfile,
    DichotomousFrequency,
    build_profile,
    payload_frame,
)
from cohortstats.reporting.report import (
    FeatureReport,
    StatisticsReport,
    build_report,
    count_per_month,
    feature_values,
    month_key,
    summarize_feature,
)

__all__ = [
    # Accuracy
    "AccuracyReport",
    # Profile
    "CategoricFrequency",
    "CohortProfile",
    "DichotomousFrequency",
    # Report
    "FeatureReport",
    "StatisticsReport",
    "build_profile",
    "build_report",
    "collect_pairs",
    "count_per_month",
    "evaluate_accuracy",
    "feature_values",
    "month_key",
    "payload_frame",
    "summarize_feature",
]
