"""
Unit tests for error metrics and their text rendering.

Run with: pytest tests/test_evaluation.py -v
"""

import numpy as np
import pytest

from price_forecaster.ml.evaluation import compute_metrics, format_metrics
from price_forecaster.models.domain import EvaluationMetrics
from price_forecaster.utils.exceptions import ValidationError


class TestComputeMetrics:
    """MSE, RMSE and MAE."""

    def test_known_values(self):
        metrics = compute_metrics([1.0, 2.0, 3.0, 4.0], [1.0, 3.0, 1.0, 4.0])
        assert metrics.mse == pytest.approx(1.25)
        assert metrics.rmse == pytest.approx(np.sqrt(1.25))
        assert metrics.mae == pytest.approx(0.75)
        assert metrics.n_samples == 4

    def test_rmse_squared_equals_mse(self):
        rng = np.random.RandomState(0)
        actual = rng.uniform(50, 150, 200)
        predicted = actual + rng.normal(0, 3, 200)
        metrics = compute_metrics(actual, predicted)
        assert metrics.rmse ** 2 == pytest.approx(metrics.mse, rel=1e-12)

    def test_perfect_prediction(self):
        metrics = compute_metrics([100.0, 101.0], [100.0, 101.0])
        assert metrics.mse == 0
        assert metrics.mae == 0

    def test_shape_mismatch(self):
        with pytest.raises(ValidationError):
            compute_metrics([1.0, 2.0], [1.0])

    def test_empty_input(self):
        with pytest.raises(ValidationError):
            compute_metrics([], [])


class TestFormatMetrics:
    """Three `<Name>: <value>` lines."""

    def test_lines_and_rounding(self):
        text = format_metrics(EvaluationMetrics(mse=12.3456, rmse=3.51363, mae=2.0, n_samples=10))
        assert text == (
            "Mean Squared Error: 12.35\n"
            "Root Mean Squared Error: 3.51\n"
            "Mean Absolute Error: 2.00\n"
        )

    def test_non_finite_metric_rejected(self):
        with pytest.raises(ValueError):
            EvaluationMetrics(mse=float("nan"), rmse=0.0, mae=0.0, n_samples=1)
