"""
Local CSV price provider for offline runs.

The file needs a ``Date`` column and a close column (``Close`` by default).
An optional ``Ticker`` column restricts rows to the requested symbol.
"""

from datetime import date
from pathlib import Path
from typing import Union
import pandas as pd

from .base import DataProvider, normalize_price_series, validate_date_range
from ...models.domain import DATE_COLUMN
from ...utils.logger import setup_logger
from ...utils.decorators import validate_ticker
from ...utils.exceptions import DataNotFoundError, DataProviderError

logger = setup_logger(__name__)


class CsvPriceProvider(DataProvider):
    """Read daily closes from a CSV file."""

    def __init__(self, path: Union[str, Path], price_column: str = "Close"):
        super().__init__(name="CSV")
        self.path = Path(path)
        self.price_column = price_column

    @validate_ticker
    def fetch_price_series(
        self,
        ticker: str,
        start_date: date,
        end_date: date,
    ) -> pd.Series:
        validate_date_range(start_date, end_date)

        if not self.path.exists():
            raise DataProviderError(f"Price file not found: {self.path}")

        try:
            df = pd.read_csv(self.path, parse_dates=[DATE_COLUMN])
        except (ValueError, pd.errors.ParserError) as e:
            raise DataProviderError(f"Could not parse {self.path}: {e}") from e

        if self.price_column not in df.columns:
            raise DataProviderError(
                f"Column {self.price_column!r} missing from {self.path}"
            )

        if "Ticker" in df.columns:
            df = df[df["Ticker"].astype(str).str.upper() == ticker]

        df = df.set_index(DATE_COLUMN)
        in_window = (df.index >= pd.Timestamp(start_date)) & (df.index < pd.Timestamp(end_date))
        df = df[in_window]

        if df.empty:
            raise DataNotFoundError(f"No rows for {ticker} in {self.path}")

        series = normalize_price_series(df[self.price_column], ticker)
        logger.info(f"Loaded {len(series)} daily closes for {ticker} from {self.path}")
        return series
