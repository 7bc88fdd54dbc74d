"""Domain models for price forecasting."""

from .domain import (
    FeatureRow,
    BoostingParams,
    EvaluationMetrics,
    DatasetSplit,
    PipelineResult,
    DATE_COLUMN,
    TARGET_COLUMN,
    PREDICTION_COLUMN,
    FEATURE_COLUMNS,
)
from .enums import MetricName

__all__ = [
    "FeatureRow",
    "BoostingParams",
    "EvaluationMetrics",
    "DatasetSplit",
    "PipelineResult",
    "DATE_COLUMN",
    "TARGET_COLUMN",
    "PREDICTION_COLUMN",
    "FEATURE_COLUMNS",
    "MetricName",
]
