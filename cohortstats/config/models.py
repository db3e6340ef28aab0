"""Pydantic models for cohortstats configuration.

Maps to ``cohortstats/config/defaults.yaml`` and to optional override
files supplied by the caller.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cohortstats.core.errors import CohortStatsError


class ConfigurationError(CohortStatsError):
    """Raised when configuration loading or validation fails."""

    pass


class ReportSettings(BaseModel):
    """Settings that shape the statistics report."""

    model_config = ConfigDict(frozen=True)

    top_n: int = Field(default=10, ge=1, description="Entries kept per non-numeric feature")
    positive_threshold: float = Field(
        default=0.6, ge=0.0, le=1.0, description="Score above which a prediction is positive"
    )
    relative_precision: int = Field(
        default=4, ge=0, le=10, description="Decimal places for relative frequencies"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        v = v.upper().strip()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown logging level: {v}")
        return v


class CohortStatsConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(frozen=True)

    report: ReportSettings = Field(default_factory=ReportSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
