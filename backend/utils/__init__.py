"""
SassWatch Utilities Package.

Configuration and logging shared across all packages.
Requires Python 3.11+.
"""

from utils.config import FailurePolicy, Settings, get_settings
from utils.logger import configure_logging, get_logger, LoggerMixin

__all__ = [
    "FailurePolicy",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggerMixin",
]
