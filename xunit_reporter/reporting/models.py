"""
Data models for test reporting.

A ``Report`` is the in-memory sink the result mapper writes into: top-level
tests (one per xUnit collection), child nodes (one per test case), their logs,
categories and timings, plus report-level system information.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from xunit_reporter.reporting.markup import Markup


class Status(Enum):
    """Test execution status."""
    PASS = "Pass"
    FAIL = "Fail"
    ERROR = "Error"
    WARNING = "Warning"
    SKIP = "Skip"
    INFO = "Info"

    def __str__(self) -> str:
        return self.value

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    Status.INFO: 0,
    Status.PASS: 1,
    Status.SKIP: 2,
    Status.WARNING: 3,
    Status.ERROR: 4,
    Status.FAIL: 5,
}

_STATUS_ALIASES = {
    "pass": Status.PASS,
    "passed": Status.PASS,
    "success": Status.PASS,
    "fail": Status.FAIL,
    "failed": Status.FAIL,
    "failure": Status.FAIL,
    "error": Status.ERROR,
    "fatal": Status.ERROR,
    "warning": Status.WARNING,
    "inconclusive": Status.WARNING,
    "skip": Status.SKIP,
    "skipped": Status.SKIP,
    "ignored": Status.SKIP,
    "notexecuted": Status.SKIP,
    "notrun": Status.SKIP,
    "info": Status.INFO,
}


def to_status(raw: Optional[str]) -> Status:
    """Resolve a raw ``result`` attribute into a Status; unknown values map to INFO."""
    if raw is None:
        return Status.INFO
    return _STATUS_ALIASES.get(raw.strip().lower(), Status.INFO)


def _worst(statuses: List[Status], default: Status = Status.PASS) -> Status:
    if not statuses:
        return default
    return max(statuses, key=lambda s: s.severity)


@dataclass
class LogEntry:
    """Single status/message record on a report entry."""
    status: Status
    details: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": str(self.status),
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(eq=False)
class ReportEntry:
    """A test (collection) or node (test case) in the report."""
    name: str
    description: str = ""
    parent: Optional["ReportEntry"] = field(default=None, repr=False)
    categories: List[str] = field(default_factory=list)
    logs: List[LogEntry] = field(default_factory=list)
    children: List["ReportEntry"] = field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def create_node(self, name: str, description: str = "") -> "ReportEntry":
        """Create a child entry under this one."""
        node = ReportEntry(name=name, description=description, parent=self)
        self.children.append(node)
        return node

    def log(self, status: Status, details: Union[str, Markup]) -> "ReportEntry":
        self.logs.append(LogEntry(status=status, details=str(details)))
        return self

    def fail(self, details: Union[str, Markup]) -> "ReportEntry":
        return self.log(Status.FAIL, details)

    def info(self, details: Union[str, Markup]) -> "ReportEntry":
        return self.log(Status.INFO, details)

    def assign_category(self, *names: str) -> "ReportEntry":
        for name in names:
            if name and name not in self.categories:
                self.categories.append(name)
        return self

    @property
    def status(self) -> Status:
        """Most severe status among own logs and children."""
        statuses = [entry.status for entry in self.logs]
        statuses.extend(child.status for child in self.children)
        significant = [s for s in statuses if s is not Status.INFO]
        if significant:
            return _worst(significant)
        return Status.INFO if statuses else Status.PASS

    @property
    def duration(self) -> Optional[float]:
        """Elapsed seconds between start and end time, when both are known."""
        if self.start_time is None or self.end_time is None:
            return None
        try:
            return (self.end_time - self.start_time).total_seconds()
        except TypeError:
            # naive vs aware timestamps
            return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, excluding empty fields."""
        result: Dict[str, Any] = {
            "name": self.name,
            "status": str(self.status),
        }
        if self.description:
            result["description"] = self.description
        if self.categories:
            result["categories"] = list(self.categories)
        if self.start_time is not None:
            result["start_time"] = self.start_time.isoformat()
        if self.end_time is not None:
            result["end_time"] = self.end_time.isoformat()
        if self.duration is not None:
            result["duration"] = self.duration
        if self.logs:
            result["logs"] = [entry.to_dict() for entry in self.logs]
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


class ReportSink(ABC):
    """Reporting collaborator the result mapper writes into."""

    @abstractmethod
    def create_test(self, name: str, description: str = "") -> ReportEntry:
        """Create a named top-level entry."""

    @abstractmethod
    def add_system_info(self, key: str, value: str) -> None:
        """Record a report-level key/value pair."""


@dataclass
class Report(ReportSink):
    """Complete report for one or more results files."""
    name: str = "Test Report"
    tests: List[ReportEntry] = field(default_factory=list)
    system_info: Dict[str, str] = field(default_factory=dict)
    source_files: List[Path] = field(default_factory=list)
    created: datetime = field(default_factory=datetime.now)

    def create_test(self, name: str, description: str = "") -> ReportEntry:
        test = ReportEntry(name=name, description=description)
        self.tests.append(test)
        return test

    def add_system_info(self, key: str, value: str) -> None:
        self.system_info[key] = value

    def iter_nodes(self) -> List[ReportEntry]:
        """All test-case nodes, in report order."""
        nodes: List[ReportEntry] = []
        stack = list(reversed(self.tests))
        while stack:
            entry = stack.pop()
            if entry.parent is not None:
                nodes.append(entry)
            stack.extend(reversed(entry.children))
        return nodes

    def get_status_counts(self) -> Dict[str, int]:
        """Count test-case nodes by status."""
        counts = {str(status): 0 for status in Status}
        for node in self.iter_nodes():
            counts[str(node.status)] += 1
        return counts

    @property
    def status(self) -> Status:
        return _worst([test.status for test in self.tests])

    @property
    def summary(self) -> str:
        """Human-readable summary of test-case outcomes."""
        counts = self.get_status_counts()
        total = sum(counts.values())
        if total == 0:
            return "No test cases found"

        parts = []
        for status_name, count in counts.items():
            if count > 0:
                rate = (count / total) * 100
                parts.append(f"{count} {status_name.lower()} ({rate:.1f}%)")
        return f"Tests: {total} total, " + ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "created": self.created.isoformat(),
            "status": str(self.status),
            "source_files": [str(path) for path in self.source_files],
            "system_info": dict(self.system_info),
            "counts": self.get_status_counts(),
            "summary": self.summary,
            "tests": [test.to_dict() for test in self.tests],
        }
