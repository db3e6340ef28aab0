"""Core types shared across the package: errors and date ranges."""

from cohortstats.core.dates import DateRange, parse_timestamp, resolve_range
from cohortstats.core.errors import (
    CohortStatsError,
    InvalidDateRangeError,
    MalformedRecordError,
    NoRecordsError,
    UndefinedSummaryError,
)

__all__ = [
    "CohortStatsError",
    "DateRange",
    "InvalidDateRangeError",
    "MalformedRecordError",
    "NoRecordsError",
    "UndefinedSummaryError",
    "parse_timestamp",
    "resolve_range",
]
