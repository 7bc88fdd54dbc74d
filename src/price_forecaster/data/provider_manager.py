"""
Data provider manager with fallback.

A run reads from exactly one configured source: the local CSV file when
one is set, Yahoo Finance otherwise. An explicit provider list is tried
in priority order.
"""

from datetime import date
from typing import List, Optional, Dict, Any
import pandas as pd

from .providers.base import DataProvider
from .providers.yahoo import YahooFinanceProvider
from .providers.csv_file import CsvPriceProvider
from ..config import Settings, DataProvider as ProviderKind, get_settings
from ..utils.logger import setup_logger
from ..utils.exceptions import (
    ConfigurationError,
    DataProviderError,
    ProviderUnavailableError,
)

logger = setup_logger(__name__)


class ProviderManager:
    """
    Manages data providers with automatic fallback.

    The default setup never mixes sources: a CSV run does not touch the
    network, so a ticker missing from the file fails the run.
    """

    def __init__(
        self,
        providers: Optional[List[DataProvider]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize provider manager.

        Args:
            providers: List of providers in priority order
                      If None, uses the provider selected by config
            settings: Settings used to build the default provider
        """
        self.settings = settings or get_settings()
        self._providers: List[DataProvider] = providers or self._init_default_providers()
        self._last_errors: Dict[str, Optional[str]] = {p.name: None for p in self._providers}

    def _init_default_providers(self) -> List[DataProvider]:
        """Initialize the single provider selected by configuration."""
        if self.settings.csv_path:
            provider: DataProvider = CsvPriceProvider(
                self.settings.csv_path,
                price_column=self.settings.csv_price_column,
            )
        elif self.settings.primary_provider == ProviderKind.CSV:
            raise ConfigurationError("primary_provider is csv but csv_path is not set")
        else:
            provider = YahooFinanceProvider(self.settings)

        logger.info(f"Using data provider: {provider.name}")
        return [provider]

    def initialize(self) -> None:
        """Initialize all providers."""
        for provider in self._providers:
            provider.initialize()

    def cleanup(self) -> None:
        """Cleanup all providers."""
        for provider in self._providers:
            provider.cleanup()

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

    def fetch_price_series(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.Series:
        """
        Fetch a PriceSeries from the first provider that succeeds.

        Raises:
            ProviderUnavailableError: If all providers fail
        """
        operation = f"fetch_price_series({ticker})"
        last_error = None

        for provider in self._providers:
            try:
                logger.debug(f"Trying {operation} with {provider.name}")
                result = provider.fetch_price_series(ticker, start_date, end_date)
                self._last_errors[provider.name] = None
                return result

            except DataProviderError as e:
                last_error = e
                self._last_errors[provider.name] = str(e)
                logger.warning(f"{operation} failed with {provider.name}: {e}")

        logger.error(f"{operation} failed with all providers")
        raise ProviderUnavailableError(
            f"All providers failed for {operation}. Last error: {last_error}"
        ) from last_error

    def get_provider_status(self) -> Dict[str, Dict[str, Any]]:
        """
        Get status of all providers.

        Returns:
            Dictionary with provider status information
        """
        status = {}
        for provider in self._providers:
            status[provider.name] = {
                "initialized": provider.is_initialized(),
                "last_error": self._last_errors[provider.name],
            }
        return status
