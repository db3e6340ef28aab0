"""Validation of record batches returned by the document store."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from cohortstats.core.errors import NoRecordsError
from cohortstats.decoding.wire import decode_record

logger = logging.getLogger(__name__)

__all__ = ["validate_records"]


def validate_records(
    records: Sequence[dict[str, Any]] | None,
    label: str = "records",
) -> list[dict[str, Any]]:
    """Reject empty batches and decode every record.

    Args:
        records: Raw records as returned by the store, or None when the
            query produced no item list at all.
        label: Batch name used in error and log messages.

    Returns:
        Decoded records, one per input record, in input order.

    Raises:
        NoRecordsError: If ``records`` is None or empty.

    """
    if not records:
        raise NoRecordsError(f"No {label} to analyze")

    decoded = [decode_record(record) for record in records]
    logger.debug(f"Decoded {len(decoded)} {label}")
    return decoded
