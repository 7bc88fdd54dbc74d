"""
Feature Engineering for Machine Learning

Turns a daily PriceSeries into the FeatureRow table:
- Trend (SMA 20/50, EMA 10)
- Momentum (RSI 14, MACD 12/26/9, discrete return)
- Volatility (10-day rolling std, Bollinger Bands 20/2)
- Calendar (ISO day of week, month)
- Lags (price t-1, t-2; return t-1, t-5)

Every indicator is aligned to the input dates and is NaN until its
lookback window is full. Rows with any NaN are dropped at the end.
"""

from typing import List
import numpy as np
import pandas as pd
import pandas_ta as ta
import pydantic

from ..models.domain import DATE_COLUMN, TARGET_COLUMN, FEATURE_COLUMNS, FeatureRow
from ..utils.decorators import timing
from ..utils.exceptions import InsufficientDataError, ValidationError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

SMA_SHORT_WINDOW = 20
SMA_LONG_WINDOW = 50
EMA_WINDOW = 10
RSI_WINDOW = 14
VOLATILITY_WINDOW = 10
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
BOLLINGER_WINDOW = 20
BOLLINGER_STD = 2.0
PRICE_LAGS = (1, 2)
RETURN_LAGS = (1, 5)

# RSI when average gain and average loss are both zero
RSI_NEUTRAL = 50.0

MIN_OBSERVATIONS = max(SMA_LONG_WINDOW, MACD_SLOW + MACD_SIGNAL - 1)


def _column(frame: pd.DataFrame, prefix: str) -> pd.Series:
    """Pick the pandas_ta output column whose name starts with prefix."""
    for name in frame.columns:
        if str(name).startswith(prefix):
            return frame[name]
    raise KeyError(f"No column starting with {prefix!r} in {list(frame.columns)}")


class FeatureEngineer:
    """
    Generate ML-ready features from a daily PriceSeries.

    The resulting DataFrame is indexed by Date and has exactly the
    columns of FeatureRow (Price first, then the model inputs).
    """

    def __init__(self):
        self.feature_names: List[str] = list(FEATURE_COLUMNS)
        self.rows_dropped = 0

    @timing
    def build_features(self, prices: pd.Series) -> pd.DataFrame:
        """
        Engineer the full feature table.

        Args:
            prices: PriceSeries (float closes, DatetimeIndex)

        Returns:
            DataFrame with one complete row per surviving date

        Raises:
            InsufficientDataError: If the series is shorter than the longest
                indicator window or no complete row survives
        """
        if prices is None or len(prices) < MIN_OBSERVATIONS:
            available = 0 if prices is None else len(prices)
            raise InsufficientDataError(
                f"Need at least {MIN_OBSERVATIONS} prices to engineer features, got {available}",
                available=available,
                required=MIN_OBSERVATIONS,
            )

        close = prices.astype(float).copy()
        close.name = TARGET_COLUMN

        features = pd.DataFrame(index=close.index)
        features[TARGET_COLUMN] = close

        features = features.join(self._create_trend_features(close))
        features = features.join(self._create_momentum_features(close))
        features = features.join(self._create_volatility_features(close))
        features = features.join(self._create_calendar_features(close.index))
        features = features.join(self._create_lag_features(close, features["Return"]))

        features = features[FeatureRow.columns()]
        features = features.replace([np.inf, -np.inf], np.nan)

        before = len(features)
        features = features.dropna()
        self.rows_dropped = before - len(features)
        logger.info(
            f"Engineered {len(self.feature_names)} features; "
            f"removed {self.rows_dropped} incomplete rows, {len(features)} remain"
        )

        if features.empty:
            raise InsufficientDataError(
                "No complete feature rows remain after dropping undefined values",
                available=before,
                required=MIN_OBSERVATIONS,
            )

        features = features.astype({"DayOfWeek": int, "Month": int})
        features.index.name = DATE_COLUMN
        return features

    def _create_trend_features(self, close: pd.Series) -> pd.DataFrame:
        """Moving averages."""
        return pd.DataFrame({
            "SMA20": ta.sma(close, length=SMA_SHORT_WINDOW),
            "SMA50": ta.sma(close, length=SMA_LONG_WINDOW),
            "EMA10": ta.ema(close, length=EMA_WINDOW),
        }, index=close.index)

    def _create_momentum_features(self, close: pd.Series) -> pd.DataFrame:
        """RSI, discrete return and MACD line/signal."""
        rsi = ta.rsi(close, length=RSI_WINDOW)
        # Flat prices give 0/0; past warm-up that reads as neutral momentum
        warmed_up = np.arange(len(close)) >= RSI_WINDOW
        rsi = rsi.where(~(rsi.isna() & warmed_up), RSI_NEUTRAL)

        macd = ta.macd(close, fast=MACD_FAST, slow=MACD_SLOW, signal=MACD_SIGNAL)

        return pd.DataFrame({
            "RSI14": rsi,
            "Return": close / close.shift(1) - 1,
            "MACD": _column(macd, "MACD_"),
            "MACD_Signal": _column(macd, "MACDs_"),
        }, index=close.index)

    def _create_volatility_features(self, close: pd.Series) -> pd.DataFrame:
        """Rolling standard deviation and Bollinger Bands."""
        bands = ta.bbands(close, length=BOLLINGER_WINDOW, std=BOLLINGER_STD)

        return pd.DataFrame({
            "Volatility": close.rolling(VOLATILITY_WINDOW).std(),
            "BollingerHigh": _column(bands, "BBU_"),
            "BollingerLow": _column(bands, "BBL_"),
            "BollingerMid": _column(bands, "BBM_"),
        }, index=close.index)

    def _create_calendar_features(self, index: pd.DatetimeIndex) -> pd.DataFrame:
        """ISO day of week (Monday=1) and month."""
        index = pd.DatetimeIndex(index)
        return pd.DataFrame({
            "DayOfWeek": index.dayofweek + 1,
            "Month": index.month,
        }, index=index)

    def _create_lag_features(self, close: pd.Series, returns: pd.Series) -> pd.DataFrame:
        """Prices and returns k periods earlier."""
        lags = {}
        for k in PRICE_LAGS:
            lags[f"Lag{k}"] = close.shift(k)
        for k in RETURN_LAGS:
            lags[f"Return_Lag{k}"] = returns.shift(k)
        return pd.DataFrame(lags, index=close.index)

    @staticmethod
    def to_rows(features: pd.DataFrame) -> List[FeatureRow]:
        """
        Convert the feature table into typed records.

        Raises:
            ValidationError: If a row breaks a FeatureRow bound
                (RSI outside 0-100, negative volatility, bad weekday)
        """
        rows = []
        for timestamp, values in features.iterrows():
            payload = values.to_dict()
            payload[DATE_COLUMN] = pd.Timestamp(timestamp).date()
            try:
                rows.append(FeatureRow.model_validate(payload))
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid feature row for {payload[DATE_COLUMN]}: {e}") from e
        return rows
