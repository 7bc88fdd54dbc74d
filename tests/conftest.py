"""Shared fixtures: synthetic price series and an in-memory provider."""

import matplotlib

matplotlib.use("Agg")

from datetime import date

import numpy as np
import pandas as pd
import pytest

from price_forecaster.config import Settings
from price_forecaster.data.providers.base import DataProvider
from price_forecaster.models.domain import DATE_COLUMN, TARGET_COLUMN


def make_price_series(values, start="2021-01-04") -> pd.Series:
    index = pd.bdate_range(start=start, periods=len(values), name=DATE_COLUMN)
    return pd.Series(np.asarray(values, dtype=float), index=index, name=TARGET_COLUMN)


class InMemoryProvider(DataProvider):
    """Serves a fixed series regardless of ticker or window."""

    def __init__(self, series: pd.Series):
        super().__init__(name="In-memory")
        self.series = series
        self.calls = []

    def fetch_price_series(self, ticker, start_date, end_date):
        self.calls.append((ticker, start_date, end_date))
        return self.series.copy()


@pytest.fixture
def trending_prices() -> pd.Series:
    """300 business days of a noisy upward random walk."""
    rng = np.random.RandomState(7)
    steps = rng.normal(0.0005, 0.015, 300)
    return make_price_series(100.0 * np.exp(np.cumsum(steps)))


@pytest.fixture
def constant_prices() -> pd.Series:
    """300 business days at exactly 100.0."""
    return make_price_series(np.full(300, 100.0))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ticker="TEST",
        start_date=date(2021, 1, 1),
        end_date=date(2022, 6, 1),
        show_plot=False,
        fetch_max_attempts=3,
        fetch_retry_delay=0.0,
        num_boost_round=40,
    )


@pytest.fixture
def in_memory_provider(trending_prices) -> InMemoryProvider:
    return InMemoryProvider(trending_prices)
