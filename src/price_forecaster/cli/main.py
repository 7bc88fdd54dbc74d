"""
Command-line interface for Price Forecaster.

Runs the fetch -> features -> split -> XGBoost -> evaluate pipeline for
one ticker and prints the test-set error metrics.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional
import pydantic

from ..config import Settings, DataProvider, SplitMethod, LogLevel
from ..ml.evaluation import format_metrics
from ..reporting.charts import render_figure
from ..services.forecaster import PriceForecaster, predictions_table
from ..utils.exceptions import PriceForecasterError
from ..utils.logger import setup_logger, set_package_level

logger = setup_logger(__name__)


class CLI:
    """Command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser."""
        parser = argparse.ArgumentParser(
            prog="price-forecaster",
            description="Price Forecaster - XGBoost price regression on technical indicators",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Reference run (AMZN, 2020-01-01 to 2024-01-01, seed 123)
  python -m price_forecaster.cli.main

  # Another ticker and window, chart saved instead of shown
  python -m price_forecaster.cli.main --ticker MSFT --start 2018-01-01 --end 2023-01-01 --save-plot msft.png

  # Leakage-free holdout from a local CSV file
  python -m price_forecaster.cli.main --csv prices.csv --split chronological --no-plot
            """
        )

        parser.add_argument('--ticker', help='Stock ticker symbol (default: AMZN)')
        parser.add_argument('--start', dest='start_date', help='First date, ISO format (default: 2020-01-01)')
        parser.add_argument('--end', dest='end_date', help='End date, ISO format, exclusive (default: 2024-01-01)')
        parser.add_argument('--seed', dest='random_seed', type=int, help='Random seed (default: 123)')
        parser.add_argument('--train-ratio', dest='train_ratio', type=float, help='Train share (default: 0.8)')
        parser.add_argument(
            '--split',
            dest='split_method',
            choices=[m.value for m in SplitMethod],
            help='Split method (default: random)'
        )
        parser.add_argument('--rounds', dest='num_boost_round', type=int, help='Boosting rounds (default: 150)')
        parser.add_argument('--csv', dest='csv_path', help='Read prices from a CSV file instead of Yahoo Finance')
        parser.add_argument('--no-plot', action='store_true', help='Skip the chart')
        parser.add_argument('--save-plot', dest='plot_path', help='Write the chart to this file instead of showing it')
        parser.add_argument('--output-csv', help='Export test-set predictions to CSV')
        parser.add_argument(
            '--log-level',
            choices=[level.value for level in LogLevel],
            help='Logging level (default: INFO)'
        )

        return parser

    def build_settings(self, parsed_args: argparse.Namespace) -> Settings:
        """Environment settings with command-line values layered on top."""
        overrides: Dict[str, Any] = {
            key: value
            for key, value in vars(parsed_args).items()
            if key in Settings.model_fields and value is not None
        }
        if parsed_args.csv_path:
            overrides['primary_provider'] = DataProvider.CSV
        if parsed_args.no_plot:
            overrides['show_plot'] = False

        return Settings(**overrides)

    def run(self, args: Optional[List[str]] = None) -> int:
        """Run CLI with given arguments."""
        parsed_args = self.parser.parse_args(args)

        try:
            settings = self.build_settings(parsed_args)
        except pydantic.ValidationError as e:
            self.parser.error(str(e))

        set_package_level(settings.log_level.value, settings.log_file)

        forecaster = PriceForecaster(settings=settings)
        make_plot = settings.show_plot or bool(settings.plot_path)
        result = forecaster.run(make_plot=make_plot)

        if parsed_args.output_csv:
            self._export_csv(result, parsed_args.output_csv)

        # Metrics first: plt.show() blocks until the window is closed
        sys.stdout.write(format_metrics(result.metrics))
        sys.stdout.flush()

        if result.figure is not None:
            render_figure(result.figure, show=settings.show_plot, save_path=settings.plot_path)

        return 0

    def _export_csv(self, result, filename: str):
        """Export test-set predictions to CSV."""
        predictions_table(result).to_csv(filename)
        logger.info(f"Predictions exported to {filename}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    cli = CLI()
    try:
        return cli.run(argv)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        return 130
    except PriceForecasterError as e:
        logger.error(f"Fatal error: {e}")
        print(f"\nError: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
