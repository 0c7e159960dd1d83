"""
Custom exceptions for xUnit Reporter.
"""


class XUnitReporterError(Exception):
    """Base exception for all xUnit Reporter errors."""
    pass


class MalformedInputError(XUnitReporterError):
    """Raised when a results file has no root element or is not XML."""
    pass


class ConfigurationError(XUnitReporterError):
    """Raised when configuration is invalid."""
    pass


class PathNotFoundError(XUnitReporterError):
    """Raised when a required path does not exist."""
    pass


class NoInputError(XUnitReporterError):
    """Raised when no results files were found to convert."""
    pass
