"""Tests for record batch validation."""

import pytest

from cohortstats.core.errors import NoRecordsError
from cohortstats.decoding.validation import validate_records


class TestValidateRecords:
    """Tests for validate_records."""

    def test_none_raises(self) -> None:
        with pytest.raises(NoRecordsError):
            validate_records(None)

    def test_empty_raises(self) -> None:
        with pytest.raises(NoRecordsError, match="No predictions"):
            validate_records([], "predictions")

    def test_length_preserved(self, wire_prediction) -> None:
        batch = [
            wire_prediction("p1", 1, {"imc": 20}),
            wire_prediction("p2", 2, {"imc": 21}),
            wire_prediction("p3", 3, {"imc": 22}),
        ]
        decoded = validate_records(batch)
        assert len(decoded) == len(batch)

    def test_element_wise_decoded(self, wire_outcome) -> None:
        decoded = validate_records([wire_outcome("p1", {"rol": "cirujano"})])
        assert decoded == [{"prediction_id": "p1", "payload": {"rol": "cirujano"}}]
