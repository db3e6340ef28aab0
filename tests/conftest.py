"""Shared fixtures for cohortstats tests."""

from typing import Any

import pytest

from cohortstats.config.models import ReportSettings

# 2024-01-15, 2024-01-20 and 2024-02-10 at 00:00 UTC, in epoch milliseconds.
JAN_15_2024 = 1705276800000
JAN_20_2024 = 1705708800000
FEB_10_2024 = 1707523200000


def _wire_prediction(
    record_id: str,
    date_ms: int,
    payload: dict[str, Any],
    scores: dict[str, float] | None = None,
) -> dict[str, Any]:
    """Build a prediction record in the store's tagged wire format."""

    def tag(value: Any) -> dict[str, Any]:
        if isinstance(value, bool):
            return {"BOOL": value}
        if isinstance(value, (int, float)):
            return {"N": str(value)}
        if value is None:
            return {"NULL": True}
        return {"S": value}

    record = {
        "id": {"S": record_id},
        "date": {"N": str(date_ms)},
        "payload": {"M": {key: tag(value) for key, value in payload.items()}},
    }
    if scores is not None:
        record["prediction"] = {"M": {key: {"N": str(v)} for key, v in scores.items()}}
    return record


def _wire_outcome(prediction_id: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Build an outcome record in the store's tagged wire format."""
    return {
        "prediction_id": {"S": prediction_id},
        "payload": {
            "M": {
                key: {"N": str(v)} if isinstance(v, (int, float)) else {"S": v}
                for key, v in payload.items()
            }
        },
    }


@pytest.fixture
def settings() -> ReportSettings:
    """Report settings with the packaged defaults."""
    return ReportSettings()


@pytest.fixture
def decoded_predictions() -> list[dict[str, Any]]:
    """Three decoded prediction records."""
    return [
        {
            "id": "p1",
            "date": JAN_15_2024,
            "payload": {"imc": 22.1, "edadmintervencion": 45, "hta": 1, "tipocx": "cardiaca"},
            "prediction": {"mortalidad": 0.8},
        },
        {
            "id": "p2",
            "date": JAN_20_2024,
            "payload": {"imc": 30.4, "edadmintervencion": 61, "hta": 0, "tipocx": "general"},
            "prediction": {"mortalidad": 0.2},
        },
        {
            "id": "p3",
            "date": FEB_10_2024,
            "payload": {"imc": 25.0, "edadmintervencion": 52, "hta": 1, "tipocx": "cardiaca"},
            "prediction": {"mortalidad": 0.65},
        },
    ]


@pytest.fixture
def decoded_outcomes() -> list[dict[str, Any]]:
    """Outcome records matching the decoded predictions."""
    return [
        {
            "prediction_id": "p1",
            "payload": {"ubicacion": "UCI", "rol": "cirujano", "estanciaHospitalaria": 5},
        },
        {
            "prediction_id": "p2",
            "payload": {"ubicacion": "piso", "rol": "cirujano", "estanciaHospitalaria": 2},
        },
        {
            "prediction_id": "p3",
            "payload": {"ubicacion": "UCI", "rol": "anestesiologo", "estanciaHospitalaria": 9},
        },
    ]


@pytest.fixture
def wire_prediction() -> Any:
    """Factory for wire-format prediction records."""
    return _wire_prediction


@pytest.fixture
def wire_outcome() -> Any:
    """Factory for wire-format outcome records."""
    return _wire_outcome
