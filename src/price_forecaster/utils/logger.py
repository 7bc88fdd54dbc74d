"""
Logging configuration for the application.

Provides consistent logging across all modules with the same format
and log levels. Records go to stderr; stdout carries only the metric report.
"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Pipeline started")
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, level.upper()))

    # Format: timestamp - name - level - message
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_package_level(level: str, log_file: Optional[str] = None) -> None:
    """
    Apply a log level to every logger already created by this package.

    Module loggers are built at import time with the default level, so the
    CLI calls this once settings are known.
    """
    numeric = getattr(logging, level.upper())
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if not name.startswith("price_forecaster") or not isinstance(candidate, logging.Logger):
            continue
        candidate.setLevel(numeric)
        for handler in candidate.handlers:
            handler.setLevel(numeric)
        if log_file and not any(isinstance(h, logging.FileHandler) for h in candidate.handlers):
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric)
            if candidate.handlers:
                file_handler.setFormatter(candidate.handlers[0].formatter)
            candidate.addHandler(file_handler)
