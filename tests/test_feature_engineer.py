"""
Unit tests for indicator and calendar feature engineering.

Run with: pytest tests/test_feature_engineer.py -v
"""

import numpy as np
import pandas as pd
import pytest

from price_forecaster.ml.feature_engineer import FeatureEngineer, RSI_NEUTRAL
from price_forecaster.models.domain import FeatureRow, FEATURE_COLUMNS
from price_forecaster.utils.exceptions import InsufficientDataError, ValidationError

from conftest import make_price_series


def reference_ema(values: np.ndarray, length: int) -> np.ndarray:
    """SMA-seeded exponential moving average, skipping leading NaNs."""
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    valid = np.flatnonzero(~np.isnan(values))
    first = valid[0]
    seed_end = first + length - 1
    out[seed_end] = values[first:seed_end + 1].mean()
    alpha = 2.0 / (length + 1)
    for i in range(seed_end + 1, len(values)):
        out[i] = alpha * values[i] + (1 - alpha) * out[i - 1]
    return out


@pytest.fixture
def features(trending_prices):
    return FeatureEngineer().build_features(trending_prices)


class TestFeatureTable:
    """Shape and completeness of the engineered table."""

    def test_columns_follow_feature_row(self, features):
        assert list(features.columns) == FeatureRow.columns()
        assert "Price" not in FEATURE_COLUMNS
        assert len(FEATURE_COLUMNS) == 17

    def test_no_undefined_values(self, features):
        assert not features.isna().any().any()
        assert np.isfinite(features.to_numpy(dtype=float)).all()

    def test_row_count_bounded_by_longest_window(self, trending_prices, features):
        assert len(features) <= len(trending_prices) - 49
        assert features.index[0] >= trending_prices.index[49]

    def test_rows_are_contiguous_tail_of_series(self, trending_prices, features):
        tail = trending_prices.loc[features.index[0]:]
        assert list(tail.index) == list(features.index)

    def test_to_rows_builds_typed_records(self, features):
        rows = FeatureEngineer.to_rows(features.head(5))
        assert len(rows) == 5
        assert isinstance(rows[0], FeatureRow)
        assert rows[0].trade_date == features.index[0].date()
        assert rows[0].price == pytest.approx(features["Price"].iloc[0])

    def test_to_rows_rejects_out_of_range_values(self, features):
        broken = features.head(3).copy()
        broken.iloc[1, broken.columns.get_loc("RSI14")] = 120.0

        with pytest.raises(ValidationError, match=str(broken.index[1].date())):
            FeatureEngineer.to_rows(broken)


class TestIndicators:
    """Indicator values against their textbook definitions."""

    def test_rsi_within_bounds(self, features):
        assert features["RSI14"].between(0, 100).all()

    def test_sma_matches_rolling_mean(self, trending_prices, features):
        expected = trending_prices.rolling(20).mean().loc[features.index]
        np.testing.assert_allclose(features["SMA20"], expected, rtol=1e-10)
        expected = trending_prices.rolling(50).mean().loc[features.index]
        np.testing.assert_allclose(features["SMA50"], expected, rtol=1e-10)

    def test_volatility_is_sample_std(self, trending_prices, features):
        expected = trending_prices.rolling(10).std().loc[features.index]
        np.testing.assert_allclose(features["Volatility"], expected, rtol=1e-10)

    def test_macd_is_difference_of_emas(self, trending_prices, features):
        close = trending_prices.to_numpy()
        macd = reference_ema(close, 12) - reference_ema(close, 26)
        expected = pd.Series(macd, index=trending_prices.index).loc[features.index]

        # Compare after seeding differences have decayed
        np.testing.assert_allclose(
            features["MACD"].iloc[-100:], expected.iloc[-100:], atol=1e-4
        )

    def test_macd_signal_is_ema_of_macd(self, trending_prices, features):
        close = trending_prices.to_numpy()
        macd = reference_ema(close, 12) - reference_ema(close, 26)
        signal = pd.Series(reference_ema(macd, 9), index=trending_prices.index)

        np.testing.assert_allclose(
            features["MACD_Signal"].iloc[-100:], signal.loc[features.index].iloc[-100:], atol=1e-4
        )

    def test_bollinger_band_ordering(self, features):
        assert (features["BollingerHigh"] >= features["BollingerMid"]).all()
        assert (features["BollingerMid"] >= features["BollingerLow"]).all()

    def test_bollinger_mid_and_width(self, trending_prices, features):
        mid = trending_prices.rolling(20).mean().loc[features.index]
        std = trending_prices.rolling(20).std(ddof=0).loc[features.index]

        np.testing.assert_allclose(features["BollingerMid"], mid, rtol=1e-8)
        np.testing.assert_allclose(features["BollingerHigh"] - mid, 2 * std, atol=1e-6)
        np.testing.assert_allclose(mid - features["BollingerLow"], 2 * std, atol=1e-6)

    def test_return_is_discrete_change(self, trending_prices, features):
        expected = (trending_prices / trending_prices.shift(1) - 1).loc[features.index]
        np.testing.assert_allclose(features["Return"], expected, rtol=1e-12)


class TestCalendarAndLags:
    """Calendar fields and lagged values."""

    def test_day_of_week_is_iso(self, features):
        expected = features.index.dayofweek + 1
        assert (features["DayOfWeek"].to_numpy() == np.asarray(expected)).all()
        # business-day fixture: Monday..Friday only
        assert set(features["DayOfWeek"].unique()) <= {1, 2, 3, 4, 5}

    def test_month_range(self, features):
        assert features["Month"].between(1, 12).all()
        assert (features["Month"].to_numpy() == np.asarray(features.index.month)).all()

    def test_price_lags_read_earlier_values(self, trending_prices, features):
        np.testing.assert_array_equal(
            features["Lag1"], trending_prices.shift(1).loc[features.index]
        )
        np.testing.assert_array_equal(
            features["Lag2"], trending_prices.shift(2).loc[features.index]
        )

    def test_return_lags_read_earlier_returns(self, trending_prices, features):
        returns = trending_prices / trending_prices.shift(1) - 1
        np.testing.assert_allclose(features["Return_Lag1"], returns.shift(1).loc[features.index])
        np.testing.assert_allclose(features["Return_Lag5"], returns.shift(5).loc[features.index])


class TestDegenerateInput:
    """Flat and short series."""

    def test_constant_series(self, constant_prices):
        features = FeatureEngineer().build_features(constant_prices)

        assert not features.empty
        for column in ["SMA20", "SMA50", "EMA10", "BollingerMid", "BollingerHigh", "BollingerLow"]:
            np.testing.assert_allclose(features[column], 100.0, atol=1e-9)
        np.testing.assert_allclose(features["Volatility"], 0.0, atol=1e-9)
        np.testing.assert_allclose(features["MACD"], 0.0, atol=1e-9)
        np.testing.assert_allclose(features["Return"], 0.0, atol=1e-12)
        assert (features["RSI14"] == RSI_NEUTRAL).all()

    def test_short_series_rejected(self):
        prices = make_price_series(np.linspace(100, 110, 30))
        with pytest.raises(InsufficientDataError) as exc_info:
            FeatureEngineer().build_features(prices)
        assert exc_info.value.available == 30
        assert exc_info.value.required == 50

    def test_rows_dropped_recorded(self, trending_prices):
        engineer = FeatureEngineer()
        features = engineer.build_features(trending_prices)
        assert engineer.rows_dropped == len(trending_prices) - len(features)
        assert engineer.rows_dropped >= 49
