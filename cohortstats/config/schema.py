"""Fixed feature schema for the cohort report.

This module is the single source of truth for feature names and their
classification. Callers and the upstream store must agree on this exact
spelling. Import from here rather than hardcoding feature strings at
call sites.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

__all__ = [
    "FEATURE_SCHEMA",
    "RESERVED_REPORT_KEYS",
    "FeatureKind",
    "FeatureSchema",
    "FeatureSpec",
    "RecordSource",
]

# Top-level report keys that no feature may shadow.
RESERVED_REPORT_KEYS = frozenset({"total", "perMonth"})


class FeatureKind(Enum):
    """Aggregation strategy for a feature."""

    NUMERIC = "numeric"
    CATEGORIC = "categoric"
    DICHOTOMOUS = "dichotomous"


class RecordSource(Enum):
    """Record batch a feature is read from."""

    PREDICTION = "prediction"
    OUTCOME = "outcome"


@dataclass(frozen=True)
class FeatureSpec:
    """A single named feature and how it is aggregated.

    Attributes:
        name: Feature key inside the record payload.
        kind: Aggregation strategy.
        source: Record batch the feature is read from.
        reported: Whether the statistics report carries the feature. Unreported
            features stay classified for the cohort profile.

    """

    name: str
    kind: FeatureKind
    source: RecordSource = RecordSource.PREDICTION
    reported: bool = True


@dataclass(frozen=True)
class FeatureSchema:
    """Immutable, ordered classification of report features.

    Every feature belongs to exactly one kind; names are unique and never
    collide with the reserved top-level report keys.
    """

    features: tuple[FeatureSpec, ...]
    _by_name: Mapping[str, FeatureSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate names and build the lookup table."""
        lookup: dict[str, FeatureSpec] = {}
        for spec in self.features:
            if spec.name in RESERVED_REPORT_KEYS:
                raise ValueError(f"Feature name {spec.name!r} is reserved")
            if spec.name in lookup:
                raise ValueError(f"Feature {spec.name!r} is classified more than once")
            lookup[spec.name] = spec
        object.__setattr__(self, "_by_name", MappingProxyType(lookup))

    def __iter__(self) -> Iterator[FeatureSpec]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> FeatureSpec:
        """Look up a feature by name.

        Raises:
            KeyError: If the feature is not part of the schema

        """
        return self._by_name[name]

    def kind_of(self, name: str) -> FeatureKind:
        """Return the kind of a named feature."""
        return self.get(name).kind

    def names(
        self,
        kind: FeatureKind | None = None,
        source: RecordSource | None = None,
    ) -> list[str]:
        """List feature names, optionally filtered by kind and source."""
        return [
            spec.name
            for spec in self.features
            if (kind is None or spec.kind is kind) and (source is None or spec.source is source)
        ]

    def for_source(self, source: RecordSource) -> list[FeatureSpec]:
        """Return the features read from one record batch, in report order."""
        return [spec for spec in self.features if spec.source is source]

    def reported(self) -> list[FeatureSpec]:
        """Return the features the statistics report carries, in report order."""
        return [spec for spec in self.features if spec.reported]


def _build_default_schema() -> FeatureSchema:
    numeric = ["edadmintervencion", "imc"]
    categoric = [
        "estratosocioecono",
        "afiliacionsistema",
        "asascore",
        "complejidadprocedimiento",
        "categoria_unica",
        "tipocx",
        "tipodeabordajecx",
    ]
    dichotomous = [
        "hta",
        "tabaquismo",
        "sexopte",
        "mtabaco",
        "arritmiacard",
        "erc",
        "fallacardcron",
        "dislipidemia",
        "dm",
        "transtiroideo",
        "diagcovid19",
        "covid19menor2",
        "esquemavacu",
        "momntointerven",
        "inestabilidadhemodinamica",
        "parocardiacopreoperatorio",
    ]
    # Classified for the cohort profile only; the report leaves it out.
    unreported = [FeatureSpec("epoc", FeatureKind.DICHOTOMOUS, reported=False)]
    outcome = [
        ("ubicacion", FeatureKind.CATEGORIC),
        ("rol", FeatureKind.CATEGORIC),
        ("estanciaHospitalaria", FeatureKind.NUMERIC),
    ]

    specs = [FeatureSpec(n, FeatureKind.NUMERIC) for n in numeric]
    specs += [FeatureSpec(n, FeatureKind.CATEGORIC) for n in categoric]
    specs += [FeatureSpec(n, FeatureKind.DICHOTOMOUS) for n in dichotomous]
    specs += unreported
    specs += [FeatureSpec(n, k, RecordSource.OUTCOME) for n, k in outcome]
    return FeatureSchema(features=tuple(specs))


FEATURE_SCHEMA: FeatureSchema = _build_default_schema()
