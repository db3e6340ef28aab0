"""Tests for prediction accuracy evaluation."""

import pytest

from cohortstats.core.errors import NoRecordsError
from cohortstats.reporting.accuracy import collect_pairs, evaluate_accuracy


@pytest.fixture
def labelled_outcomes() -> list[dict]:
    """Outcomes carrying a binary label for the mortalidad target."""
    return [
        {"prediction_id": "p1", "payload": {"mortalidad": 1}},
        {"prediction_id": "p2", "payload": {"mortalidad": 0}},
        {"prediction_id": "p3", "payload": {"mortalidad": 0}},
    ]


class TestCollectPairs:
    """Tests for collect_pairs."""

    def test_joins_by_prediction_id(self, decoded_predictions, labelled_outcomes) -> None:
        pairs, unmatched = collect_pairs(decoded_predictions, labelled_outcomes)
        assert pairs == {"mortalidad": ([0.8, 0.2, 0.65], [1, 0, 0])}
        assert unmatched == 0

    def test_outcome_without_prediction(self, decoded_predictions) -> None:
        outcomes = [{"prediction_id": "missing", "payload": {"mortalidad": 1}}]
        pairs, unmatched = collect_pairs(decoded_predictions, outcomes)
        assert pairs == {}
        assert unmatched == 1

    def test_missing_label_skipped(self, decoded_predictions) -> None:
        outcomes = [{"prediction_id": "p1", "payload": {}}]
        pairs, _ = collect_pairs(decoded_predictions, outcomes)
        assert pairs == {}

    def test_string_label_parsed(self, decoded_predictions) -> None:
        outcomes = [{"prediction_id": "p2", "payload": {"mortalidad": "1"}}]
        pairs, _ = collect_pairs(decoded_predictions, outcomes)
        assert pairs == {"mortalidad": ([0.2], [1])}

    def test_oversized_score_skipped(self) -> None:
        predictions = [{"id": "p1", "prediction": {"mortalidad": 10**400}}]
        outcomes = [{"prediction_id": "p1", "payload": {"mortalidad": 1}}]
        pairs, unmatched = collect_pairs(predictions, outcomes)
        assert pairs == {}
        assert unmatched == 0


class TestEvaluateAccuracy:
    """Tests for evaluate_accuracy."""

    def test_confusion_matrix_per_target(self, decoded_predictions, labelled_outcomes) -> None:
        report = evaluate_accuracy(decoded_predictions, labelled_outcomes)
        matrix = report.targets["mortalidad"]
        # predicted 1, 0, 1 against actual 1, 0, 0
        assert (matrix.TP, matrix.FP, matrix.TN, matrix.FN) == (1, 1, 1, 0)
        assert matrix.success_percentage == "66.67 %"
        assert report.threshold == 0.6
        assert report.matched_outcomes == 3

    def test_custom_threshold(self, decoded_predictions, labelled_outcomes) -> None:
        report = evaluate_accuracy(decoded_predictions, labelled_outcomes, threshold=0.7)
        assert report.targets["mortalidad"].success_percentage == "100.00 %"

    def test_to_dict(self, decoded_predictions, labelled_outcomes) -> None:
        data = evaluate_accuracy(decoded_predictions, labelled_outcomes).to_dict()
        assert data["targets"]["mortalidad"]["TP"] == 1

    def test_empty_batches_raise(self, decoded_predictions) -> None:
        with pytest.raises(NoRecordsError):
            evaluate_accuracy([], [])
        with pytest.raises(NoRecordsError):
            evaluate_accuracy(decoded_predictions, [])
