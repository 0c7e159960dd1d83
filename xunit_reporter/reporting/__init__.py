"""
Test reporting module for xUnit Reporter.

This module provides:
- The in-memory report model results are mapped into
- The xUnit v2 results mapper
- Report file generation (JSON, Markdown)
"""

from xunit_reporter.reporting.models import (
    LogEntry,
    Report,
    ReportEntry,
    ReportSink,
    Status,
    to_status,
)
from xunit_reporter.reporting.markup import Markup, code_block
from xunit_reporter.reporting.parser import ResultMapper, TagScope, parse_tags
from xunit_reporter.reporting.generator import ReportGenerator

__all__ = [
    "LogEntry",
    "Report",
    "ReportEntry",
    "ReportSink",
    "Status",
    "to_status",
    "Markup",
    "code_block",
    "ResultMapper",
    "TagScope",
    "parse_tags",
    "ReportGenerator",
]
