"""Enumerations for domain models."""

from enum import Enum


class MetricName(str, Enum):
    """Display names for the reported error metrics."""

    MSE = "Mean Squared Error"
    RMSE = "Root Mean Squared Error"
    MAE = "Mean Absolute Error"
