"""Decoder for tagged-union wire values.

The document store wraps every attribute in a single-key object naming its
type, e.g. ``{"S": "abc"}``, ``{"N": "12.5"}`` or ``{"M": {...}}``. This
module strips those tags recursively to produce plain Python values.

Decoding is total: shapes that do not match a known tag are passed through
(mappings are decoded field by field) rather than rejected.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["WireTag", "classify", "decode", "decode_record", "parse_number"]


class WireTag(Enum):
    """Type tags understood by the decoder."""

    STRING = "S"
    NUMBER = "N"
    MAP = "M"
    LIST = "L"
    BOOL = "BOOL"
    NULL = "NULL"
    STRING_SET = "SS"
    NUMBER_SET = "NS"
    # Not a wire tag: any object that is not a single-key tagged value.
    UNKNOWN = "?"


_TAGS_BY_KEY = {tag.value: tag for tag in WireTag if tag is not WireTag.UNKNOWN}


def classify(value: dict[str, Any]) -> WireTag:
    """Identify the tag carried by a mapping.

    A mapping is tagged only when it has exactly one key and that key is a
    known tag. Anything else is ``WireTag.UNKNOWN``.
    """
    if len(value) != 1:
        return WireTag.UNKNOWN
    (key,) = value
    return _TAGS_BY_KEY.get(key, WireTag.UNKNOWN)


def parse_number(text: Any) -> int | float | Any:
    """Parse a numeric wire string into an int or float.

    Integral text becomes ``int``; anything else parseable becomes ``float``.
    Values that are already numbers are returned unchanged, and text that
    cannot be parsed is returned as-is.
    """
    if isinstance(text, bool):
        return text
    if isinstance(text, (int, float)):
        return text
    if not isinstance(text, str):
        logger.debug(f"Numeric tag carries non-string value {text!r}; passing through")
        return text

    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        logger.debug(f"Unparsable numeric value {text!r}; passing through")
        return text


def _decode_tagged(tag: WireTag, inner: Any) -> Any:
    if tag is WireTag.STRING:
        return inner
    if tag is WireTag.NUMBER:
        return parse_number(inner)
    if tag is WireTag.MAP:
        # Decode field by field; a lone field named like a tag is still a field.
        if isinstance(inner, dict):
            return {key: decode(item) for key, item in inner.items()}
        return decode(inner)
    if tag is WireTag.LIST:
        return decode(inner)
    if tag is WireTag.BOOL:
        return inner
    if tag is WireTag.NULL:
        return None
    if tag is WireTag.STRING_SET:
        return list(inner) if isinstance(inner, (list, tuple, set)) else inner
    if tag is WireTag.NUMBER_SET:
        if isinstance(inner, (list, tuple, set)):
            return [parse_number(item) for item in inner]
        return inner
    raise AssertionError(f"Unhandled tag: {tag}")


def decode(value: Any) -> Any:
    """Recursively strip wire tags from a value.

    Args:
        value: A raw wire value, or an already-decoded value.

    Returns:
        The plain value. Scalars are returned unchanged, lists are decoded
        element-wise, tagged mappings are unwrapped and any other mapping is
        decoded field by field.

    """
    if isinstance(value, list):
        return [decode(item) for item in value]
    if not isinstance(value, dict):
        return value

    tag = classify(value)
    if tag is WireTag.UNKNOWN:
        return {key: decode(item) for key, item in value.items()}

    (inner,) = value.values()
    return _decode_tagged(tag, inner)


def decode_record(record: dict[str, Any]) -> dict[str, Any]:
    """Decode one stored record (a mapping of field name to wire value).

    Unlike :func:`decode`, the top level is always treated as a record, so
    a record with a single field named like a tag is not mistaken for a
    tagged value.
    """
    if not isinstance(record, dict):
        logger.debug(f"Record of type {type(record).__name__} is not a mapping; passing through")
        return decode(record)
    return {key: decode(item) for key, item in record.items()}
