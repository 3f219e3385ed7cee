"""
Logging configuration for pairsort.

Sets up loguru with appropriate levels and formatting.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_LOG_FILE = "pairsort.log"


def setup_logging(
    level: str = "INFO",
    debug: bool = False,
    log_file: str | Path | None = DEFAULT_LOG_FILE,
) -> None:
    """
    Configure loguru logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        debug: If True, enable debug logging and more verbose output
        log_file: Path of the rotating log file, or None to log to stderr only
    """
    # Remove default handler
    logger.remove()
    logger.configure(extra={"name": "pairsort"})

    log_level = "DEBUG" if debug else level

    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[name]}:{function}:{line}</cyan> - <level>{message}</level>",
    )

    if log_file is None:
        return

    log_path = Path(log_file)
    logger.add(
        log_path,
        level="INFO",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
    )

    if debug:
        logger.add(
            log_path.with_name(f"{log_path.stem}_debug{log_path.suffix}"),
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}",
            rotation="50 MB",
            retention="3 days",
            compression="zip",
        )


def get_logger(name: str | None = None) -> Any:
    """
    Get a logger instance.

    Args:
        name: Optional name for the logger (defaults to "pairsort")

    Returns:
        Logger instance
    """
    return logger.bind(name=name or "pairsort")
