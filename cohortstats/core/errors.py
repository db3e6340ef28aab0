"""Exception types raised by the decode-and-aggregate pipeline.

Every error aborts the whole report build. None of them are retried: the
computation is pure, so running it again on the same input cannot succeed.
"""


class CohortStatsError(Exception):
    """Base class for all cohortstats errors."""

    pass


class NoRecordsError(CohortStatsError):
    """Raised when a batch to validate is absent or empty."""

    def __init__(self, message: str = "No records to analyze") -> None:
        """Initialize with a default message."""
        super().__init__(message)


class UndefinedSummaryError(CohortStatsError):
    """Raised when a statistic needs more observations than are available."""

    pass


class InvalidDateRangeError(CohortStatsError):
    """Raised when a date bound is malformed or the range is inverted."""

    pass


class MalformedRecordError(CohortStatsError):
    """Raised when a decoded record lacks a field the report depends on."""

    pass
