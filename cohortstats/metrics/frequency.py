"""Frequency tabulation of discrete values.

Tables are ordered mappings from the string form of each value to its
count. Insertion order is first-seen order, which makes tie-breaking in
:func:`top_n` deterministic.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

__all__ = ["MISSING_KEY", "count_values", "format_key", "top_n"]

# Key used for values that are absent or null in a record.
MISSING_KEY = "null"


def format_key(value: Any) -> str:
    """Render a value as a frequency-table key.

    Integral floats drop their fractional part so that ``25.0`` and ``25``
    share a key, matching how the upstream store renders numbers.
    """
    if value is None:
        return MISSING_KEY
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def count_values(values: Iterable[Any]) -> dict[str, int]:
    """Count occurrences of each distinct value.

    Args:
        values: Values to tabulate; each is keyed by :func:`format_key`.

    Returns:
        Mapping of key to count, in first-seen order.

    """
    return dict(Counter(format_key(value) for value in values))


def top_n(table: Mapping[str, int], n: int) -> dict[str, int]:
    """Keep the ``n`` entries with the highest counts.

    Ties keep their order in ``table``. Entries past the cutoff are dropped
    without an aggregated remainder bucket.

    Raises:
        ValueError: If ``n`` is negative.

    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    ranked = sorted(table.items(), key=lambda item: item[1], reverse=True)
    return dict(ranked[:n])
