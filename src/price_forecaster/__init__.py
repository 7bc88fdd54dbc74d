"""
Price Forecaster - single-ticker price regression on technical indicators.

Fetches daily closes, derives trend, momentum, volatility, calendar and lag
features, fits an XGBoost regressor and reports test-set error metrics.
"""

__version__ = "1.0.0"
__author__ = "Price Forecaster Team"
