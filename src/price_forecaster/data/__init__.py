"""Data layer for fetching daily price history."""

from .provider_manager import ProviderManager
from .providers import (
    DataProvider,
    IHistoricalDataProvider,
    YahooFinanceProvider,
    CsvPriceProvider,
)

__all__ = [
    "ProviderManager",
    "DataProvider",
    "IHistoricalDataProvider",
    "YahooFinanceProvider",
    "CsvPriceProvider",
]
