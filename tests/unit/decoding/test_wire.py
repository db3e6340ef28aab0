"""Tests for the tagged-union wire decoder."""

import json

import pytest

from cohortstats.decoding.wire import WireTag, classify, decode, decode_record, parse_number


class TestClassify:
    """Tests for tag classification."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ({"S": "x"}, WireTag.STRING),
            ({"N": "1"}, WireTag.NUMBER),
            ({"M": {}}, WireTag.MAP),
            ({"L": []}, WireTag.LIST),
            ({"BOOL": True}, WireTag.BOOL),
            ({"NULL": True}, WireTag.NULL),
            ({"SS": ["a"]}, WireTag.STRING_SET),
            ({"NS": ["1"]}, WireTag.NUMBER_SET),
        ],
    )
    def test_known_tags(self, value: dict, expected: WireTag) -> None:
        assert classify(value) is expected

    def test_unknown_key(self) -> None:
        assert classify({"imc": 22.1}) is WireTag.UNKNOWN

    def test_multiple_keys_are_not_tagged(self) -> None:
        assert classify({"S": "a", "N": "1"}) is WireTag.UNKNOWN

    def test_empty_mapping(self) -> None:
        assert classify({}) is WireTag.UNKNOWN


class TestParseNumber:
    """Tests for numeric string parsing."""

    def test_integer_text(self) -> None:
        assert parse_number("42") == 42
        assert isinstance(parse_number("42"), int)

    def test_decimal_text(self) -> None:
        assert parse_number("22.1") == pytest.approx(22.1)

    def test_exponent_text(self) -> None:
        assert parse_number("1e3") == 1000.0

    def test_unparsable_text_passes_through(self) -> None:
        assert parse_number("abc") == "abc"

    def test_number_passes_through(self) -> None:
        assert parse_number(3.5) == 3.5


class TestDecode:
    """Tests for recursive decoding."""

    def test_scalars_unchanged(self) -> None:
        assert decode("text") == "text"
        assert decode(7) == 7
        assert decode(None) is None

    def test_string_tag(self) -> None:
        assert decode({"S": "cardiaca"}) == "cardiaca"

    def test_number_tag(self) -> None:
        assert decode({"N": "30.4"}) == pytest.approx(30.4)

    def test_bool_and_null_tags(self) -> None:
        assert decode({"BOOL": False}) is False
        assert decode({"NULL": True}) is None

    def test_nested_map(self) -> None:
        raw = {"M": {"imc": {"N": "25"}, "tipocx": {"S": "general"}}}
        assert decode(raw) == {"imc": 25, "tipocx": "general"}

    def test_map_with_tag_named_field(self) -> None:
        assert decode({"M": {"N": {"S": "5"}}}) == {"N": "5"}
        assert decode({"M": {"L": {"N": "1"}}}) == {"L": 1}

    def test_empty_map(self) -> None:
        assert decode({"M": {}}) == {}

    def test_list_tag(self) -> None:
        raw = {"L": [{"S": "a"}, {"N": "2"}, {"M": {"k": {"S": "v"}}}]}
        assert decode(raw) == ["a", 2, {"k": "v"}]

    def test_plain_list(self) -> None:
        assert decode([{"S": "a"}, {"N": "1"}]) == ["a", 1]

    def test_sets(self) -> None:
        assert decode({"SS": ["a", "b"]}) == ["a", "b"]
        assert decode({"NS": ["1", "2.5"]}) == [1, 2.5]

    def test_untagged_mapping_decoded_field_by_field(self) -> None:
        raw = {"id": {"S": "p1"}, "date": {"N": "1000"}}
        assert decode(raw) == {"id": "p1", "date": 1000}

    def test_unknown_shape_passes_through(self) -> None:
        raw = {"X": "unexpected"}
        decoded = decode(raw)
        assert decoded == {"X": "unexpected"}
        json.dumps(decoded)

    @pytest.mark.parametrize("value", ["abc", 12, 12.5, True, None])
    def test_idempotent_on_scalars(self, value: object) -> None:
        assert decode(decode(value)) == decode(value)

    def test_idempotent_on_decoded_record(self) -> None:
        decoded = decode({"payload": {"M": {"imc": {"N": "22.1"}}}})
        assert decode(decoded) == decoded


class TestDecodeRecord:
    """Tests for top-level record decoding."""

    def test_record_with_tag_like_field_name(self) -> None:
        # A record whose only field is named "S" is still a record.
        assert decode_record({"S": {"S": "value"}}) == {"S": "value"}

    def test_payload_with_tag_like_feature_name(self) -> None:
        assert decode_record({"payload": {"M": {"N": {"S": "5"}}}}) == {"payload": {"N": "5"}}

    def test_full_prediction_record(self, wire_prediction) -> None:
        raw = wire_prediction("p1", 1705276800000, {"imc": 22.1, "tipocx": "cardiaca"})
        assert decode_record(raw) == {
            "id": "p1",
            "date": 1705276800000,
            "payload": {"imc": 22.1, "tipocx": "cardiaca"},
        }
