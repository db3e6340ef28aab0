"""Decoding of tagged-union wire records."""

from cohortstats.decoding.validation import validate_records
from cohortstats.decoding.wire import WireTag, classify, decode, decode_record, parse_number

__all__ = [
    "WireTag",
    "classify",
    "decode",
    "decode_record",
    "parse_number",
    "validate_records",
]
