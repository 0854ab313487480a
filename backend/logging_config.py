"""
Logging Configuration
Console logging for the API process.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str = None) -> logging.Logger:
    """
    Configure the root logger once.

    Args:
        level: Level name; defaults to $LOG_LEVEL or INFO

    Returns:
        The package logger
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    return logging.getLogger("fleet_alerts")
