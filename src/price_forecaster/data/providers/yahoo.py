"""
Yahoo Finance data provider implementation.

Fetches daily closes through the yfinance library. The download is wrapped
in an exponential-backoff retry; an unknown symbol is not retried.
"""

from datetime import date
from typing import Optional
import pandas as pd
import yfinance as yf

from .base import DataProvider, normalize_price_series, validate_date_range
from ...config.settings import Settings, get_settings
from ...utils.logger import setup_logger
from ...utils.decorators import retry, validate_ticker, timing
from ...utils.exceptions import (
    DataNotFoundError,
    DataProviderError,
)

logger = setup_logger(__name__)


class YahooFinanceProvider(DataProvider):
    """Yahoo Finance daily history via yfinance."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(name="Yahoo Finance")
        self._settings = settings or get_settings()
        self._fetch = retry(
            max_attempts=self._settings.fetch_max_attempts,
            delay=self._settings.fetch_retry_delay,
            backoff=self._settings.fetch_retry_backoff,
            exceptions=(DataProviderError,),
            give_up_on=(DataNotFoundError,),
        )(self._download)

    @timing
    @validate_ticker
    def fetch_price_series(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.Series:
        """
        Fetch daily closing prices from Yahoo Finance.

        Args:
            ticker: Stock ticker symbol
            start_date: First date (inclusive)
            end_date: Last date (exclusive, as in yfinance)

        Returns:
            PriceSeries for the window
        """
        validate_date_range(start_date, end_date)
        logger.info(f"Fetching {ticker} closes {start_date} -> {end_date} from {self.name}")

        df = self._fetch(ticker, start_date, end_date)
        series = normalize_price_series(df["Close"], ticker)

        logger.info(f"Fetched {len(series)} daily closes for {ticker}")
        return series

    def _download(self, ticker: str, start_date: date, end_date: date) -> pd.DataFrame:
        """Single yfinance history call, with errors mapped to provider errors."""
        try:
            stock = yf.Ticker(ticker)
            df = stock.history(
                start=start_date.isoformat(),
                end=end_date.isoformat(),
                interval="1d",
                auto_adjust=self._settings.auto_adjust,
            )
        except Exception as e:
            logger.error(f"Error fetching historical data for {ticker}: {e}")
            raise DataProviderError(f"Failed to fetch historical data for {ticker}: {e}") from e

        if df is None or df.empty or "Close" not in df:
            raise DataNotFoundError(f"No historical data for {ticker}")

        logger.debug(f"Fetched {len(df)} bars for {ticker}")
        return df
