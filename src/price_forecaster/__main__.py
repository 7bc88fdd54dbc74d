"""Allow ``python -m price_forecaster``."""

import sys

from .cli.main import main

sys.exit(main())
