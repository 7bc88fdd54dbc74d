"""Utility modules for common functionality."""

from .logger import setup_logger, set_package_level
from .exceptions import (
    PriceForecasterError,
    ConfigurationError,
    DataProviderError,
    DataNotFoundError,
    ProviderUnavailableError,
    ValidationError,
    InsufficientDataError,
    ModelError,
    ModelNotTrainedError,
)
from .decorators import retry, timing, validate_ticker, normalize_ticker

__all__ = [
    "setup_logger",
    "set_package_level",
    "PriceForecasterError",
    "ConfigurationError",
    "DataProviderError",
    "DataNotFoundError",
    "ProviderUnavailableError",
    "ValidationError",
    "InsufficientDataError",
    "ModelError",
    "ModelNotTrainedError",
    "retry",
    "timing",
    "validate_ticker",
    "normalize_ticker",
]
