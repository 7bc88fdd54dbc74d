"""
Domain models using Pydantic for type-safe data validation.

FeatureRow is the single source of truth for the feature table layout:
column names used by the indicator code and the model are derived from
its field aliases.
"""

import datetime as dt
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
import numpy as np
import pandas as pd


class FeatureRow(BaseModel):
    """One trading day of engineered features."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    trade_date: dt.date = Field(..., alias="Date")
    price: float = Field(..., alias="Price", description="Closing price (target)")

    # Trend
    sma20: float = Field(..., alias="SMA20", description="20-day SMA")
    sma50: float = Field(..., alias="SMA50", description="50-day SMA")
    ema10: float = Field(..., alias="EMA10", description="10-day EMA")

    # Momentum
    rsi14: float = Field(..., alias="RSI14", ge=0, le=100, description="RSI (14)")
    volatility: float = Field(..., alias="Volatility", ge=0, description="10-day price std")
    return_: float = Field(..., alias="Return", description="Discrete 1-day return")
    macd: float = Field(..., alias="MACD", description="MACD line")
    macd_signal: float = Field(..., alias="MACD_Signal", description="MACD signal line")

    # Bollinger Bands (20, 2)
    bollinger_high: float = Field(..., alias="BollingerHigh")
    bollinger_low: float = Field(..., alias="BollingerLow")
    bollinger_mid: float = Field(..., alias="BollingerMid")

    # Calendar
    day_of_week: int = Field(..., alias="DayOfWeek", ge=1, le=7, description="ISO weekday")
    month: int = Field(..., alias="Month", ge=1, le=12)

    # Lags
    lag1: float = Field(..., alias="Lag1", description="Price one period earlier")
    lag2: float = Field(..., alias="Lag2", description="Price two periods earlier")
    return_lag1: float = Field(..., alias="Return_Lag1")
    return_lag5: float = Field(..., alias="Return_Lag5")

    @classmethod
    def columns(cls) -> List[str]:
        """Table column names in declaration order (date excluded)."""
        return [
            field.alias
            for name, field in cls.model_fields.items()
            if name != "trade_date"
        ]

    @classmethod
    def feature_columns(cls) -> List[str]:
        """Model input columns: every column except the target price."""
        return [c for c in cls.columns() if c != TARGET_COLUMN]


DATE_COLUMN = "Date"
TARGET_COLUMN = "Price"
PREDICTION_COLUMN = "Predicted"
FEATURE_COLUMNS: List[str] = FeatureRow.feature_columns()


class BoostingParams(BaseModel):
    """Hyperparameters passed to xgboost.train."""

    objective: str = "reg:squarederror"
    eta: float = Field(0.1, gt=0, description="Learning rate")
    max_depth: int = Field(6, ge=1)
    subsample: float = Field(0.8, gt=0, le=1)
    colsample_bytree: float = Field(0.8, gt=0, le=1)
    num_boost_round: int = Field(150, ge=1)
    eval_period: int = Field(10, ge=1, description="Log evaluation every N rounds")
    seed: int = 123

    def to_xgb_params(self) -> Dict[str, Any]:
        """Booster parameters (round count and logging period excluded)."""
        return {
            "objective": self.objective,
            "eta": self.eta,
            "max_depth": self.max_depth,
            "subsample": self.subsample,
            "colsample_bytree": self.colsample_bytree,
            "seed": self.seed,
        }


class EvaluationMetrics(BaseModel):
    """Error metrics of predicted against actual prices."""

    mse: float = Field(..., ge=0)
    rmse: float = Field(..., ge=0)
    mae: float = Field(..., ge=0)
    n_samples: int = Field(..., ge=1)

    @field_validator("mse", "rmse", "mae")
    @classmethod
    def validate_finite(cls, v):
        """Reject NaN and infinite metric values."""
        if not np.isfinite(v):
            raise ValueError("metric must be finite")
        return v


class DatasetSplit(BaseModel):
    """Train/test partition of the feature table."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    train: pd.DataFrame
    test: pd.DataFrame
    train_mask: pd.Series = Field(..., description="True where the row is in train")

    @property
    def train_fraction(self) -> float:
        return len(self.train) / len(self.train_mask)


class PipelineResult(BaseModel):
    """Everything produced by a single pipeline run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    ticker: str
    features: pd.DataFrame
    rows: List[FeatureRow] = Field(default_factory=list, description="Validated feature records")
    split: DatasetSplit
    predictions: pd.DataFrame = Field(..., description="Test rows plus Predicted column")
    metrics: EvaluationMetrics
    history: Dict[str, Dict[str, List[float]]] = Field(default_factory=dict)
    figure: Optional[Any] = None
