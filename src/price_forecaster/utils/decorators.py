"""
Utility decorators for common patterns (retry, timing, validation).

These decorators centralize cross-cutting concerns of the data and
modelling layers.
"""

import functools
import time
from typing import Any, Callable, Optional, Type, Tuple
from .logger import setup_logger

logger = setup_logger(__name__)


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    give_up_on: Tuple[Type[Exception], ...] = (),
):
    """
    Retry a function with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts (1 disables retrying)
        delay: Initial delay between retries (seconds)
        backoff: Multiplier for exponential backoff
        exceptions: Tuple of exceptions to catch and retry
        give_up_on: Exceptions re-raised immediately even if they match
            ``exceptions``

    Example:
        >>> @retry(max_attempts=3, delay=2.0)
        >>> def fetch_history(ticker: str):
        >>>     return yf.Ticker(ticker).history(period="1y")
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            current_delay = delay

            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except give_up_on:
                    raise
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(
                            f"{func.__name__} failed after {max_attempts} attempts: {e}"
                        )
                        raise

                    logger.warning(
                        f"{func.__name__} attempt {attempt}/{max_attempts} failed: {e}. "
                        f"Retrying in {current_delay:.1f}s..."
                    )

                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper
    return decorator


def timing(func: Callable) -> Callable:
    """
    Decorator to measure function execution time.

    Example:
        >>> @timing
        >>> def build_features(prices):
        >>>     # ... indicator logic
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__name__} completed in {elapsed:.3f}s")
            return result
        except Exception as e:
            elapsed = time.perf_counter() - start
            logger.error(f"{func.__name__} failed after {elapsed:.3f}s: {e}")
            raise

    return wrapper


def normalize_ticker(ticker: Optional[str]) -> str:
    """Strip and upper-case a ticker symbol, rejecting malformed input."""
    if not isinstance(ticker, str):
        raise ValueError(f"Ticker must be string, got {type(ticker)}")

    ticker = ticker.strip().upper()

    if not ticker:
        raise ValueError("Ticker cannot be empty")

    if len(ticker) > 10:
        raise ValueError(f"Ticker too long: {ticker}")

    return ticker


def validate_ticker(func: Callable) -> Callable:
    """
    Decorator to validate ticker symbols on provider methods.

    Ensures ticker is a string, not empty, and follows basic format rules.
    """
    @functools.wraps(func)
    def wrapper(self, ticker: str, *args, **kwargs) -> Any:
        return func(self, normalize_ticker(ticker), *args, **kwargs)

    return wrapper
