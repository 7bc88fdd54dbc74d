"""
Application configuration using Pydantic BaseSettings.

Every value has a default matching the reference analysis (AMZN,
2020-01-01 to 2024-01-01, seed 123) and can be overridden through
environment variables prefixed with ``FORECASTER_`` or a ``.env`` file.
"""

from datetime import date
from typing import Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from enum import Enum


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DataProvider(str, Enum):
    """Available price data providers."""

    YAHOO = "yahoo"
    CSV = "csv"


class SplitMethod(str, Enum):
    """How rows are assigned to the train and test sets."""

    RANDOM = "random"
    CHRONOLOGICAL = "chronological"


class Settings(BaseSettings):
    """
    Pipeline settings with validation.

    Load from .env file or environment variables.
    """

    # Application Settings
    app_name: str = "Price Forecaster"
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = None

    # Market Data Settings
    ticker: str = "AMZN"
    start_date: date = date(2020, 1, 1)
    end_date: date = date(2024, 1, 1)
    auto_adjust: bool = True

    # Data Provider Configuration
    primary_provider: DataProvider = DataProvider.YAHOO
    csv_path: Optional[str] = None
    csv_price_column: str = "Close"

    # Retry policy for the network fetch (1 attempt = no retries)
    fetch_max_attempts: int = Field(3, ge=1)
    fetch_retry_delay: float = Field(1.0, ge=0)
    fetch_retry_backoff: float = Field(2.0, ge=1)

    # Split Settings
    random_seed: int = 123
    train_ratio: float = 0.8
    split_method: SplitMethod = SplitMethod.RANDOM

    # XGBoost Settings
    objective: str = "reg:squarederror"
    learning_rate: float = Field(0.1, gt=0)
    max_depth: int = Field(6, ge=1)
    subsample: float = Field(0.8, gt=0, le=1)
    colsample_bytree: float = Field(0.8, gt=0, le=1)
    num_boost_round: int = 150
    eval_period: int = Field(10, ge=1)

    # Reporting Settings
    show_plot: bool = True
    plot_path: Optional[str] = None

    @field_validator("ticker")
    @classmethod
    def validate_ticker(cls, v):
        """Ensure ticker is uppercase and non-empty."""
        v = v.strip().upper()
        if not v:
            raise ValueError("ticker cannot be empty")
        return v

    @field_validator("train_ratio")
    @classmethod
    def validate_train_ratio(cls, v):
        """Ensure the train share leaves rows on both sides."""
        if not 0 < v < 1:
            raise ValueError("train_ratio must be strictly between 0 and 1")
        return v

    @field_validator("num_boost_round")
    @classmethod
    def validate_rounds(cls, v):
        """Ensure at least one boosting round is run."""
        if v < 1:
            raise ValueError("num_boost_round must be positive")
        return v

    @model_validator(mode="after")
    def validate_date_range(self):
        """Ensure the history window is not empty."""
        if self.start_date >= self.end_date:
            raise ValueError("start_date must be before end_date")
        return self

    model_config = {
        "env_prefix": "FORECASTER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
    }


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern).

    Returns:
        Settings instance loaded from environment

    Example:
        >>> settings = get_settings()
        >>> settings.ticker
        'AMZN'
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Force reload settings from environment.

    Useful for testing or when environment changes.
    """
    global _settings
    _settings = Settings()
    return _settings
