"""Configuration for cohortstats: report settings and the feature schema.

Example:
    from cohortstats.config import FEATURE_SCHEMA, load_config

    config = load_config("overrides.yaml")
    numeric = FEATURE_SCHEMA.names(FeatureKind.NUMERIC)

"""

from .loader import configure_logging, get_config, load_config
from .models import CohortStatsConfig, ConfigurationError, LoggingConfig, ReportSettings
from .schema import (
    FEATURE_SCHEMA,
    RESERVED_REPORT_KEYS,
    FeatureKind,
    FeatureSchema,
    FeatureSpec,
    RecordSource,
)

__all__ = [
    "FEATURE_SCHEMA",
    "RESERVED_REPORT_KEYS",
    "CohortStatsConfig",
    "ConfigurationError",
    "FeatureKind",
    "FeatureSchema",
    "FeatureSpec",
    "LoggingConfig",
    "RecordSource",
    "ReportSettings",
    "configure_logging",
    "get_config",
    "load_config",
]
