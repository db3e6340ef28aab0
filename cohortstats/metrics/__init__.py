"""Metric calculations: numeric summaries, frequencies and confusion matrices."""

from cohortstats.metrics.confusion import (
    DEFAULT_THRESHOLD,
    ConfusionMatrix,
    classify_scores,
    evaluate,
    split_by_threshold,
)
from cohortstats.metrics.frequency import MISSING_KEY, count_values, format_key, top_n
from cohortstats.metrics.statistics import (
    NumericSummary,
    calculate_mean,
    calculate_median,
    calculate_quartiles,
    numeric_values,
    sample_std_dev,
    summarize,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "MISSING_KEY",
    "ConfusionMatrix",
    "NumericSummary",
    "calculate_mean",
    "calculate_median",
    "calculate_quartiles",
    "classify_scores",
    "count_values",
    "evaluate",
    "format_key",
    "numeric_values",
    "sample_std_dev",
    "split_by_threshold",
    "summarize",
    "top_n",
]
