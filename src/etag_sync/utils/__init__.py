"""Utility functions for etag-sync."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def setup_logging(log_level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure loguru sinks for an etag-sync run.

    Args:
        log_level: Minimum level written to stderr and the log file
        log_file: Optional path of a rotating log file
    """
    logger.remove()

    logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=False, colorize=True)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=False,
            enqueue=True,
            colorize=False,
        )
        logger.debug(f"File logging enabled: {log_path}")
