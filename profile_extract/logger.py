"""
Logging configuration for profile extraction.
"""

import logging
import sys

from .config import Config

# Create logger
logger = logging.getLogger('profile_extract')
logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))

if not logger.handlers:
    # Console handler with formatting
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-5s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console.setFormatter(formatter)

    logger.addHandler(console)

# Component loggers hang off the package logger
def get_logger(name):
    """Get a child logger for a specific component."""
    return logger.getChild(name)
