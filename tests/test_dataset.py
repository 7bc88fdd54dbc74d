"""
Unit tests for train/test splitting.

Run with: pytest tests/test_dataset.py -v
"""

import numpy as np
import pytest

from price_forecaster.config import SplitMethod
from price_forecaster.ml.dataset import split_dataset
from price_forecaster.ml.feature_engineer import FeatureEngineer
from price_forecaster.utils.exceptions import ValidationError


@pytest.fixture
def features(trending_prices):
    return FeatureEngineer().build_features(trending_prices)


class TestRandomSplit:
    """Seeded, date-independent assignment."""

    def test_partition_covers_all_rows_once(self, features):
        split = split_dataset(features, 0.8, np.random.RandomState(123))

        assert len(split.train) + len(split.test) == len(features)
        assert split.train.index.intersection(split.test.index).empty
        assert split.train.index.union(split.test.index).equals(features.index)

    def test_train_fraction_near_ratio(self, features):
        split = split_dataset(features, 0.8, np.random.RandomState(123))
        assert split.train_fraction == pytest.approx(0.8, abs=1 / len(features))

    def test_mask_matches_subsets(self, features):
        split = split_dataset(features, 0.8, np.random.RandomState(123))
        assert list(split.train_mask[split.train_mask].index) == list(split.train.index)
        assert list(split.train_mask[~split.train_mask].index) == list(split.test.index)

    def test_same_seed_is_reproducible(self, features):
        first = split_dataset(features, 0.8, np.random.RandomState(123))
        second = split_dataset(features, 0.8, np.random.RandomState(123))
        assert first.train_mask.equals(second.train_mask)

    def test_different_seed_changes_assignment(self, features):
        first = split_dataset(features, 0.8, np.random.RandomState(123))
        second = split_dataset(features, 0.8, np.random.RandomState(321))
        assert not first.train_mask.equals(second.train_mask)

    def test_subsets_sorted_by_date(self, features):
        split = split_dataset(features, 0.8, np.random.RandomState(123))
        assert split.train.index.is_monotonic_increasing
        assert split.test.index.is_monotonic_increasing

    def test_not_time_ordered(self, features):
        """Random split interleaves dates, unlike a holdout."""
        split = split_dataset(features, 0.8, np.random.RandomState(123))
        assert split.test.index.min() < split.train.index.max()

    def test_random_state_required(self, features):
        with pytest.raises(ValidationError):
            split_dataset(features, 0.8, None)


class TestChronologicalSplit:
    """Holdout with every test date after every train date."""

    def test_test_dates_follow_train_dates(self, features):
        split = split_dataset(features, 0.8, method=SplitMethod.CHRONOLOGICAL)
        assert split.train.index.max() < split.test.index.min()
        assert len(split.train) == round(0.8 * len(features))

    def test_accepts_string_method(self, features):
        split = split_dataset(features, 0.75, method="chronological")
        assert len(split.train) == round(0.75 * len(features))


class TestDegenerateSplits:
    """Ratios and sizes that leave a side empty."""

    @pytest.mark.parametrize("ratio", [0.0, 1.0, -0.1, 1.5])
    def test_invalid_ratio(self, features, ratio):
        with pytest.raises(ValidationError):
            split_dataset(features, ratio, np.random.RandomState(1))

    def test_single_row_cannot_be_split(self, features):
        with pytest.raises(ValidationError):
            split_dataset(features.head(1), 0.8, np.random.RandomState(1))
