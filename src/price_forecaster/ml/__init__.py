"""
Machine Learning module for price prediction.

Includes:
- Feature engineering (trend, momentum, volatility, calendar, lags)
- Random or chronological train/test split
- XGBoost regression
- Error metrics
"""

from .feature_engineer import FeatureEngineer
from .dataset import split_dataset
from .predictor import PricePredictor
from .evaluation import compute_metrics, format_metrics

__all__ = [
    "FeatureEngineer",
    "split_dataset",
    "PricePredictor",
    "compute_metrics",
    "format_metrics",
]
