"""
Logging Configuration

Root logger setup shared by command-line entry points.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure the root logger for console output.

    Args:
        level: Logging level name ("DEBUG", "INFO", ...) or number.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
