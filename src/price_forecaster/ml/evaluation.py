"""Error metrics for predicted prices."""

from typing import Sequence, Union
import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error

from ..models.domain import EvaluationMetrics
from ..models.enums import MetricName
from ..utils.exceptions import ValidationError

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]


def compute_metrics(actual: ArrayLike, predicted: ArrayLike) -> EvaluationMetrics:
    """
    Compute MSE, RMSE and MAE of predicted against actual values.

    RMSE is the square root of MSE, so rmse ** 2 == mse up to rounding.
    """
    actual = np.asarray(actual, dtype=float)
    predicted = np.asarray(predicted, dtype=float)

    if actual.shape != predicted.shape:
        raise ValidationError(
            f"actual and predicted differ in shape: {actual.shape} vs {predicted.shape}"
        )
    if actual.size == 0:
        raise ValidationError("Cannot evaluate an empty test set")

    mse = float(mean_squared_error(actual, predicted))
    return EvaluationMetrics(
        mse=mse,
        rmse=float(np.sqrt(mse)),
        mae=float(mean_absolute_error(actual, predicted)),
        n_samples=int(actual.size),
    )


def format_metrics(metrics: EvaluationMetrics) -> str:
    """Render the three metrics as ``<Name>: <value>`` lines, 2 decimals."""
    lines = [
        f"{MetricName.MSE.value}: {metrics.mse:.2f}",
        f"{MetricName.RMSE.value}: {metrics.rmse:.2f}",
        f"{MetricName.MAE.value}: {metrics.mae:.2f}",
    ]
    return "\n".join(lines) + "\n"
