"""Charts for prediction results."""

from .charts import plot_predictions, render_figure

__all__ = ["plot_predictions", "render_figure"]
