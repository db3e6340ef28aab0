"""cohortstats - cohort analytics for medical-procedure predictions.

This package decodes tagged-union records retrieved from a document store
and aggregates predictions and their recorded outcomes into a single
statistics report driven by a fixed feature schema.
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "core",
    "decoding",
    "metrics",
    "pipeline",
    "reporting",
]
