"""
Core forecasting service.

Orchestrates one forward pass: fetch prices, engineer features, split,
train, predict, evaluate and chart.
"""

from typing import Optional
import numpy as np
import pandas as pd

from ..config import Settings, get_settings
from ..data.provider_manager import ProviderManager
from ..data.providers.base import IHistoricalDataProvider
from ..ml.dataset import split_dataset
from ..ml.evaluation import compute_metrics
from ..ml.feature_engineer import FeatureEngineer
from ..ml.predictor import PricePredictor
from ..models.domain import (
    BoostingParams,
    PipelineResult,
    PREDICTION_COLUMN,
    TARGET_COLUMN,
)
from ..reporting.charts import plot_predictions
from ..utils.decorators import timing
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


def boosting_params_from_settings(settings: Settings) -> BoostingParams:
    """Map the flat settings onto xgboost hyperparameters."""
    return BoostingParams(
        objective=settings.objective,
        eta=settings.learning_rate,
        max_depth=settings.max_depth,
        subsample=settings.subsample,
        colsample_bytree=settings.colsample_bytree,
        num_boost_round=settings.num_boost_round,
        eval_period=settings.eval_period,
        seed=settings.random_seed,
    )


class PriceForecaster:
    """
    Single-ticker price forecasting pipeline.

    Collaborators are injected so tests can swap the data provider and
    the predictor. The random state is created per run from the seed,
    so repeated runs with the same settings split identically.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[IHistoricalDataProvider] = None,
        feature_engineer: Optional[FeatureEngineer] = None,
        predictor: Optional[PricePredictor] = None,
    ):
        """
        Initialize forecaster.

        Args:
            settings: Pipeline settings (loads from environment if None)
            provider: Price source (ProviderManager built from settings if None)
            feature_engineer: Feature builder (default FeatureEngineer)
            predictor: Model wrapper (built from settings if None)
        """
        self.settings = settings or get_settings()
        self.provider = provider or ProviderManager(settings=self.settings)
        self.feature_engineer = feature_engineer or FeatureEngineer()
        self.predictor = predictor or PricePredictor(boosting_params_from_settings(self.settings))

    @timing
    def run(self, ticker: Optional[str] = None, make_plot: bool = True) -> PipelineResult:
        """
        Execute the pipeline once.

        Args:
            ticker: Symbol to model (default: settings.ticker)
            make_plot: Build the actual vs. predicted figure

        Returns:
            PipelineResult with features, split, predictions, metrics and figure
        """
        ticker = (ticker or self.settings.ticker).strip().upper()
        logger.info(f"Starting forecast for {ticker}")

        prices = self.provider.fetch_price_series(
            ticker,
            self.settings.start_date,
            self.settings.end_date,
        )

        features = self.feature_engineer.build_features(prices)
        rows = self.feature_engineer.to_rows(features)

        rng = np.random.RandomState(self.settings.random_seed)
        split = split_dataset(
            features,
            train_ratio=self.settings.train_ratio,
            rng=rng,
            method=self.settings.split_method,
        )

        self.predictor.fit(split.train, split.test)

        predictions = split.test.copy()
        predictions[PREDICTION_COLUMN] = self.predictor.predict(split.test)

        metrics = compute_metrics(predictions[TARGET_COLUMN], predictions[PREDICTION_COLUMN])
        logger.info(
            f"{ticker} test metrics - MSE: {metrics.mse:.4f}, RMSE: {metrics.rmse:.4f}, "
            f"MAE: {metrics.mae:.4f} over {metrics.n_samples} rows"
        )

        figure = plot_predictions(predictions, ticker) if make_plot else None

        return PipelineResult(
            ticker=ticker,
            features=features,
            rows=rows,
            split=split,
            predictions=predictions,
            metrics=metrics,
            history=self.predictor.history,
            figure=figure,
        )


def run_forecast(
    settings: Optional[Settings] = None,
    provider: Optional[IHistoricalDataProvider] = None,
    make_plot: bool = True,
) -> PipelineResult:
    """Convenience wrapper: build a PriceForecaster and run it once."""
    return PriceForecaster(settings=settings, provider=provider).run(make_plot=make_plot)


def predictions_table(result: PipelineResult) -> pd.DataFrame:
    """Date, actual and predicted price of every test row."""
    table = result.predictions[[TARGET_COLUMN, PREDICTION_COLUMN]].copy()
    table["Error"] = table[PREDICTION_COLUMN] - table[TARGET_COLUMN]
    return table
