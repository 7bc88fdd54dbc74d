"""Pipeline services."""

from .forecaster import PriceForecaster, run_forecast, predictions_table, boosting_params_from_settings

__all__ = [
    "PriceForecaster",
    "run_forecast",
    "predictions_table",
    "boosting_params_from_settings",
]
