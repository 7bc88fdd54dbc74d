"""
Gradient-boosted price regressor.

Wraps xgboost's native training API: the training and test sets are both
on the watch list so the per-round loss is recorded for monitoring.
There is no early stopping; every configured round is trained.

References:
- Chen & Guestrin (2016): "XGBoost: A Scalable Tree Boosting System"
"""

from typing import Dict, List, Optional
import numpy as np
import pandas as pd
import xgboost as xgb

from ..models.domain import BoostingParams, FEATURE_COLUMNS, TARGET_COLUMN
from ..utils.decorators import timing
from ..utils.exceptions import ModelError, ModelNotTrainedError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class PricePredictor:
    """
    XGBoost regression ensemble predicting closing price from features.

    One instance is one training context: it owns its parameters, the
    fitted booster and the evaluation history of the last fit.
    """

    def __init__(
        self,
        params: Optional[BoostingParams] = None,
        feature_names: Optional[List[str]] = None,
    ):
        """
        Initialize predictor.

        Args:
            params: Boosting hyperparameters (defaults reproduce the reference run)
            feature_names: Model input columns (default: every FeatureRow input)
        """
        self.params = params or BoostingParams()
        self.feature_names = list(feature_names or FEATURE_COLUMNS)
        self.booster: Optional[xgb.Booster] = None
        self.history: Dict[str, Dict[str, List[float]]] = {}

        logger.info("Initialized price predictor with params: %s", self.params.to_xgb_params())

    def _matrix(self, frame: pd.DataFrame, with_label: bool = True) -> xgb.DMatrix:
        missing = [c for c in self.feature_names if c not in frame.columns]
        if missing:
            raise ModelError(f"Missing feature columns: {missing}")

        label = frame[TARGET_COLUMN].to_numpy(dtype=float) if with_label else None
        return xgb.DMatrix(
            frame[self.feature_names].astype(float),
            label=label,
            feature_names=self.feature_names,
        )

    @timing
    def fit(self, train: pd.DataFrame, test: Optional[pd.DataFrame] = None) -> xgb.Booster:
        """
        Train the booster on the training rows.

        Args:
            train: Training rows (features plus Price)
            test: Optional held-out rows watched during training

        Returns:
            The fitted booster
        """
        if train.empty:
            raise ModelError("Cannot train on an empty training set")

        logger.info(
            f"Training XGBoost on {len(train)} samples, {len(self.feature_names)} features, "
            f"{self.params.num_boost_round} rounds"
        )

        dtrain = self._matrix(train)
        evals = [(dtrain, "train")]
        if test is not None and not test.empty:
            evals.append((self._matrix(test), "test"))

        history: Dict[str, Dict[str, List[float]]] = {}
        self.booster = xgb.train(
            self.params.to_xgb_params(),
            dtrain,
            num_boost_round=self.params.num_boost_round,
            evals=evals,
            evals_result=history,
            verbose_eval=False,
        )
        self.history = history
        self._log_history()

        return self.booster

    def _log_history(self) -> None:
        """Log the watch-list losses every eval_period rounds and on the last round."""
        if not self.history:
            return

        n_rounds = self.params.num_boost_round
        period = self.params.eval_period
        for i in range(n_rounds):
            if i % period != 0 and i != n_rounds - 1:
                continue
            parts = []
            for data_name, metrics in self.history.items():
                for metric_name, values in metrics.items():
                    parts.append(f"{data_name}-{metric_name}:{values[i]:.5f}")
            logger.info(f"[{i}]\t" + "\t".join(parts))

    def predict(self, frame: pd.DataFrame) -> np.ndarray:
        """
        Predict price for every row of frame.

        Raises:
            ModelNotTrainedError: If called before fit
        """
        if self.booster is None:
            raise ModelNotTrainedError("Model not trained yet - call fit() first")

        if frame.empty:
            return np.array([], dtype=float)

        predictions = self.booster.predict(self._matrix(frame, with_label=False))
        logger.debug(f"Predicted {len(predictions)} rows, mean {predictions.mean():.2f}")
        return predictions

    def feature_importance(self, importance_type: str = "gain") -> Dict[str, float]:
        """Importance per feature, sorted descending; unused features score 0."""
        if self.booster is None:
            raise ModelNotTrainedError("Model not trained yet - call fit() first")

        scores = self.booster.get_score(importance_type=importance_type)
        importance = {name: float(scores.get(name, 0.0)) for name in self.feature_names}
        return dict(sorted(importance.items(), key=lambda x: x[1], reverse=True))
