"""
Custom exception hierarchy for the price forecaster.

Every failure the pipeline raises on purpose derives from
PriceForecasterError so callers can handle them in one place.
"""


class PriceForecasterError(Exception):
    """Base exception for all price forecaster errors."""

    pass


class ConfigurationError(PriceForecasterError):
    """Raised when configuration is invalid or missing."""

    pass


class DataProviderError(PriceForecasterError):
    """Base exception for data provider errors."""

    pass


class DataNotFoundError(DataProviderError):
    """Raised when requested data is not found."""

    pass


class ProviderUnavailableError(DataProviderError):
    """Raised when all data providers are unavailable."""

    pass


class ValidationError(PriceForecasterError):
    """Raised when input validation fails."""

    pass


class InsufficientDataError(PriceForecasterError):
    """Raised when too few rows remain to build features or a split."""

    def __init__(self, message: str, available: int = 0, required: int = 0):
        self.available = available
        self.required = required
        super().__init__(message)


class ModelError(PriceForecasterError):
    """Raised when model training or inference fails."""

    pass


class ModelNotTrainedError(ModelError):
    """Raised when predictions are requested from an unfitted model."""

    pass
