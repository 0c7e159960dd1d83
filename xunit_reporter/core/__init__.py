"""
Core modules for xUnit Reporter.
"""

from xunit_reporter.core.errors import (
    XUnitReporterError,
    MalformedInputError,
    ConfigurationError,
    PathNotFoundError,
    NoInputError,
)
from xunit_reporter.core.logging import setup_logger, get_logger

__all__ = [
    "XUnitReporterError",
    "MalformedInputError",
    "ConfigurationError",
    "PathNotFoundError",
    "NoInputError",
    "setup_logger",
    "get_logger",
]
