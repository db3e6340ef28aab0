"""Date range resolution for prediction queries.

Bounds arrive as optional text (typically query-string values) and are
normalized into an interval of epoch milliseconds. The storage query that
consumes the range compares strictly on both ends, so a record stamped
exactly on a bound is excluded.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from cohortstats.core.errors import InvalidDateRangeError

__all__ = ["DateRange", "parse_timestamp", "resolve_range", "to_datetime"]


class DateRange(BaseModel):
    """Interval of epoch-millisecond timestamps.

    Attributes:
        from_ms: Lower bound (exclusive).
        to_ms: Upper bound (exclusive).

    """

    model_config = ConfigDict(frozen=True)

    from_ms: int = Field(default=0, description="Lower bound in epoch milliseconds")
    to_ms: int = Field(..., description="Upper bound in epoch milliseconds")

    def contains(self, timestamp_ms: float) -> bool:
        """Check whether a timestamp falls strictly inside the range."""
        return self.from_ms < timestamp_ms < self.to_ms


def parse_timestamp(text: str) -> int:
    """Parse an ISO-8601 date or date-time into epoch milliseconds.

    Naive values are interpreted as UTC, matching how bare calendar dates
    such as ``2024-01-15`` are read upstream.

    Args:
        text: Date text, e.g. ``"2024-01-15"`` or ``"2024-01-15T10:30:00+02:00"``.

    Returns:
        Milliseconds since the Unix epoch.

    Raises:
        InvalidDateRangeError: If the text is not a valid ISO-8601 date.

    """
    try:
        parsed = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise InvalidDateRangeError(f"Invalid date: {text!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp() * 1000)


def to_datetime(timestamp_ms: float) -> datetime:
    """Convert epoch milliseconds into an aware UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def resolve_range(
    from_text: str | None = None,
    to_text: str | None = None,
    now: datetime | None = None,
) -> DateRange:
    """Resolve optional textual bounds into a concrete date range.

    Args:
        from_text: Lower bound text; absent or empty resolves to the epoch.
        to_text: Upper bound text; absent or empty resolves to ``now``.
        now: Reference instant for the open upper bound (defaults to the
            current UTC time).

    Returns:
        DateRange with both bounds set.

    Raises:
        InvalidDateRangeError: If a bound is malformed or ``from`` is after ``to``.

    """
    from_ms = parse_timestamp(from_text) if from_text else 0
    if to_text:
        to_ms = parse_timestamp(to_text)
    else:
        reference = now if now is not None else datetime.now(UTC)
        to_ms = int(reference.timestamp() * 1000)

    if from_ms > to_ms:
        raise InvalidDateRangeError(f"Range start {from_text!r} is after range end {to_text!r}")

    return DateRange(from_ms=from_ms, to_ms=to_ms)
