"""
xUnit Reporter

Convert xUnit v2 test-result XML into structured test reports.
"""

__version__ = "0.1.0"

from xunit_reporter.core.config import Config
from xunit_reporter.core.pipeline import ConversionPipeline
from xunit_reporter.reporting.models import Report
from xunit_reporter.reporting.parser import ResultMapper

__all__ = [
    "Config",
    "ConversionPipeline",
    "Report",
    "ResultMapper",
]
