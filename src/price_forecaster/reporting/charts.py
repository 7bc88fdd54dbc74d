"""
Actual vs. predicted price chart.

Builds the figure with the object-oriented matplotlib API so callers
decide whether it is shown, saved or discarded.
"""

from pathlib import Path
from typing import Optional, Union
import matplotlib.pyplot as plt
import matplotlib.dates as mdates
from matplotlib.figure import Figure
import pandas as pd

from ..models.domain import PREDICTION_COLUMN, TARGET_COLUMN
from ..utils.exceptions import ValidationError
from ..utils.logger import setup_logger

logger = setup_logger(__name__)

ACTUAL_COLOR = "blue"
PREDICTED_COLOR = "red"
DATE_TICK_MONTHS = 6


def plot_predictions(
    predictions: pd.DataFrame,
    ticker: str,
    fig_size: tuple = (12, 6),
) -> Figure:
    """
    Plot actual and predicted price over the test dates.

    Args:
        predictions: Test rows with Price and Predicted columns, date index
        ticker: Symbol used in the title
        fig_size: Figure size in inches

    Returns:
        The matplotlib Figure
    """
    for column in (TARGET_COLUMN, PREDICTION_COLUMN):
        if column not in predictions.columns:
            raise ValidationError(f"Column {column!r} missing from predictions")

    data = predictions.sort_index()

    fig, ax = plt.subplots(figsize=fig_size)
    ax.plot(data.index, data[TARGET_COLUMN], color=ACTUAL_COLOR, label="Actual")
    ax.plot(data.index, data[PREDICTION_COLUMN], color=PREDICTED_COLOR, label="Predicted")

    ax.set_title(f"{ticker.upper()} Stock Price Prediction with XGBoost")
    ax.set_xlabel("Date")
    ax.set_ylabel("Price")
    ax.legend()
    ax.grid(True, alpha=0.3)

    ax.xaxis.set_major_locator(mdates.MonthLocator(interval=DATE_TICK_MONTHS))
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %Y"))
    ax.tick_params(axis="x", labelrotation=45)

    fig.tight_layout()
    return fig


def render_figure(
    fig: Figure,
    show: bool = True,
    save_path: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """
    Save the figure when a path is given, otherwise show it if requested.

    Returns:
        Path written, or None
    """
    written = None
    if save_path:
        written = Path(save_path)
        written.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(written, dpi=150, bbox_inches="tight")
        logger.info(f"Saved prediction chart to {written}")
    elif show:
        plt.show()

    plt.close(fig)
    return written
