"""Data provider implementations."""

from .base import DataProvider, IHistoricalDataProvider
from .yahoo import YahooFinanceProvider
from .csv_file import CsvPriceProvider

__all__ = [
    "DataProvider",
    "IHistoricalDataProvider",
    "YahooFinanceProvider",
    "CsvPriceProvider",
]
