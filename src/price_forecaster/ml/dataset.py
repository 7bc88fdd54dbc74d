"""
Train/test splitting of the feature table.

The random method reproduces the original analysis: rows are assigned
independently of their date, so later dates can land in train while
earlier ones land in test. The chronological method keeps every test
date after every train date.
"""

from typing import Optional, Union
import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from ..config.settings import SplitMethod
from ..models.domain import DatasetSplit
from ..utils.exceptions import ValidationError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


def _train_size(n_rows: int, train_ratio: float) -> int:
    if not 0 < train_ratio < 1:
        raise ValidationError(f"train_ratio must be in (0, 1), got {train_ratio}")

    n_train = int(round(train_ratio * n_rows))
    if n_train < 1 or n_train >= n_rows:
        raise ValidationError(
            f"Split of {n_rows} rows at ratio {train_ratio} leaves an empty subset"
        )
    return n_train


def split_dataset(
    features: pd.DataFrame,
    train_ratio: float = 0.8,
    rng: Optional[np.random.RandomState] = None,
    method: Union[SplitMethod, str] = SplitMethod.RANDOM,
) -> DatasetSplit:
    """
    Partition rows into train and test.

    Args:
        features: Feature table indexed by date
        train_ratio: Share of rows assigned to train
        rng: Random state driving the random method; required for it
        method: SplitMethod.RANDOM or SplitMethod.CHRONOLOGICAL

    Returns:
        DatasetSplit with both subsets sorted by date and the train mask

    Raises:
        ValidationError: For a ratio outside (0, 1), a missing random state
            or a split leaving either side empty
    """
    method = SplitMethod(method)
    n_train = _train_size(len(features), train_ratio)

    if method == SplitMethod.RANDOM:
        if rng is None:
            raise ValidationError("A random state is required for a random split")
        train_index, _ = train_test_split(
            features.index,
            train_size=n_train,
            shuffle=True,
            random_state=rng,
        )
        train_mask = pd.Series(features.index.isin(train_index), index=features.index)
    else:
        positions = np.arange(len(features))
        train_mask = pd.Series(positions < n_train, index=features.index)

    train_mask.name = "is_train"
    split = DatasetSplit(
        train=features[train_mask.values].sort_index(),
        test=features[~train_mask.values].sort_index(),
        train_mask=train_mask,
    )

    logger.info(
        f"{method.value.capitalize()} split: {len(split.train)} train / "
        f"{len(split.test)} test rows ({split.train_fraction:.1%} train)"
    )
    return split
