"""
Base abstract interface for price data providers.

Concrete providers return a normalised PriceSeries: a float Series named
``Price`` indexed by a tz-naive, strictly increasing ``Date`` index.
"""

from abc import ABC, abstractmethod
from datetime import date
import pandas as pd

from ...models.domain import DATE_COLUMN, TARGET_COLUMN
from ...utils.exceptions import DataNotFoundError, ValidationError


class IHistoricalDataProvider(ABC):
    """Interface for historical daily closing prices."""

    @abstractmethod
    def fetch_price_series(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.Series:
        """
        Fetch daily closing prices.

        Args:
            ticker: Stock ticker symbol
            start_date: First date of the window (inclusive)
            end_date: Last date of the window (exclusive)

        Returns:
            Series named Price with a Date index

        Raises:
            DataNotFoundError: If no data available
            ValidationError: If date range invalid
            DataProviderError: For other provider errors
        """
        pass


class DataProvider(IHistoricalDataProvider, ABC):
    """
    Named provider with context-manager lifecycle.

    Providers holding resources override ``initialize``/``cleanup``.
    """

    def __init__(self, name: str):
        """
        Initialize provider.

        Args:
            name: Provider name for logging and identification
        """
        self.name = name
        self._initialized = False

    def initialize(self) -> None:
        self._initialized = True

    def cleanup(self) -> None:
        self._initialized = False

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

    def is_initialized(self) -> bool:
        """Check if provider is initialized."""
        return self._initialized


def validate_date_range(start_date: date, end_date: date) -> None:
    """Raise ValidationError unless start_date is strictly before end_date."""
    if start_date >= end_date:
        raise ValidationError(
            f"start_date {start_date} must be before end_date {end_date}"
        )


def normalize_price_series(closes: pd.Series, ticker: str) -> pd.Series:
    """
    Coerce raw provider closes into a PriceSeries.

    Drops the timezone and time of day, removes missing closes, keeps the
    last observation for duplicated dates and sorts by date.
    """
    series = pd.to_numeric(closes, errors="coerce").astype(float)
    index = pd.DatetimeIndex(series.index)
    if index.tz is not None:
        index = index.tz_localize(None)
    series.index = index.normalize()

    series = series.dropna()
    series = series[~series.index.duplicated(keep="last")].sort_index()

    if series.empty:
        raise DataNotFoundError(f"No price data for {ticker}")

    series.name = TARGET_COLUMN
    series.index.name = DATE_COLUMN
    return series
