"""
xUnit v2 results parser.

Maps an ``assemblies/assembly/collection/test`` results document onto a
report sink: one top-level test per collection and one child node per test
case, carrying status, message, categories and timings.
"""

import re
import xml.etree.ElementTree as ET
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, Optional, Set, Union
from xml.parsers.expat import errors as expat_errors

from xunit_reporter.core.errors import MalformedInputError, PathNotFoundError
from xunit_reporter.core.logging import get_logger
from xunit_reporter.reporting.markup import code_block
from xunit_reporter.reporting.models import ReportEntry, ReportSink, Status, to_status

COLLECTION_PREFIX = "Test collection for "
UNKNOWN_KEY = "unknown"
PARAMETERIZED_SUITE_TYPE = "parameterizedtest"
DEFAULT_OS_VERSION_LABEL = "NUnit Version"

_NO_ELEMENTS_CODE = expat_errors.codes[expat_errors.XML_ERROR_NO_ELEMENTS]

_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y",
)

# datetime.fromisoformat wants exactly 6 fractional digits on older Pythons; .NET emits 7
_FRACTION_RE = re.compile(r"\.(\d+)")


class TagScope(Enum):
    """Where to look for ``categories`` blocks relative to an element."""
    DIRECT = "direct"
    RECURSIVE = "recursive"


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def _element_text(elem: Optional[ET.Element]) -> Optional[str]:
    """Concatenated text content of an element and its descendants."""
    if elem is None:
        return None
    return "".join(elem.itertext())


def _child_text(elem: Optional[ET.Element], tag: str) -> Optional[str]:
    if elem is None:
        return None
    return _element_text(elem.find(tag))


def _find(elem: ET.Element, tag: str, scope: TagScope) -> Iterator[ET.Element]:
    if scope is TagScope.RECURSIVE:
        return elem.iterfind(f".//{tag}")
    return elem.iterfind(tag)


def parse_tags(elem: ET.Element, scope: TagScope) -> Set[str]:
    """Collect ``categories/category[@name]`` values below an element."""
    categories: Set[str] = set()
    for block in _find(elem, "categories", scope):
        for category in block.iterfind("category"):
            name = category.get("name")
            if name:
                categories.add(name)
    return categories


def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """Best-effort timestamp parsing; returns None when the value is not a date."""
    if _is_blank(raw):
        return None
    text = raw.strip()

    iso = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    if iso.endswith(("Z", "z")):
        iso = iso[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def get_collection_name(collection: ET.Element) -> str:
    return collection.get("name", "").replace(COLLECTION_PREFIX, "")


def get_description(case: ET.Element) -> str:
    """Value of the first descendant ``Description`` property, or ''."""
    for prop in case.iterfind(".//property"):
        if prop.get("name", "").casefold() == "description":
            return prop.get("value", "")
    return ""


def build_status_message(case: ET.Element, status: Status) -> str:
    """
    Combine a test case's diagnostics into a single status message.

    Failure message, failure stack trace, skip reason and captured output are
    trimmed and concatenated in that order, skipping blank ones. Fail and Error
    messages are rendered as a code block. A case without diagnostics reports
    its status name.
    """
    failure = case.find("failure")
    parts = [
        _child_text(failure, "message"),
        _child_text(failure, "stack-trace"),
        _child_text(case.find("reason"), "message"),
        _element_text(case.find("output")),
    ]
    message = "".join(part.strip() for part in parts if not _is_blank(part))

    if message and status in (Status.FAIL, Status.ERROR):
        message = code_block(message).get_markup()
    return message or str(status)


def add_system_information(root: ET.Element, sink: ReportSink,
                           label: str = DEFAULT_OS_VERSION_LABEL) -> None:
    """Record the first assembly's OS version as report-level system info."""
    env = next(root.iter("assembly"), None)
    if env is None:
        return

    os_version = env.get("os-version")
    if _is_blank(os_version) or os_version.casefold() == UNKNOWN_KEY:
        return
    sink.add_system_info(label, os_version)


def load_document(path: Union[str, Path]) -> ET.ElementTree:
    """Parse a results file, translating XML errors into MalformedInputError."""
    path = Path(path)
    if not path.is_file():
        raise PathNotFoundError(f"Results file does not exist: {path}")
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        if e.code == _NO_ELEMENTS_CODE:
            raise MalformedInputError(f"Root element not found for {path}") from e
        raise MalformedInputError(f"Malformed results file {path}: {e}") from e


class ResultMapper:
    """Map xUnit results documents onto a report sink."""

    def __init__(self, os_version_label: str = DEFAULT_OS_VERSION_LABEL):
        self.os_version_label = os_version_label
        self.logger = get_logger(__name__)

    def map_file(self, path: Union[str, Path], sink: ReportSink) -> None:
        """Load ``path`` and map it into ``sink``."""
        document = load_document(path)
        self.logger.debug(f"Loaded results file {path}")
        self.map(document, sink, source=str(path))

    def map(self, document: ET.ElementTree, sink: ReportSink, source: str = "<document>") -> None:
        """
        Map a parsed results document into ``sink``.

        Args:
            document: Parsed results document
            sink: Report the entries are created in
            source: Name of the input, used in error messages

        Raises:
            MalformedInputError: If the document has no root element
        """
        root = document.getroot()
        if root is None:
            raise MalformedInputError(f"Root element not found for {source}")

        add_system_information(root, sink, self.os_version_label)

        parents = {child: parent for parent in root.iter() for child in parent}
        collections = 0
        cases = 0

        # Collection-level categories are not read; cases inherit only from a ParameterizedTest suite
        for collection in root.iter("collection"):
            test = sink.create_test(get_collection_name(collection))
            self._assign_collection_failure(collection, test)

            output = _element_text(collection.find("output"))
            if not _is_blank(output):
                test.info(output)

            for case in collection.iterfind(".//test"):
                self._map_case(case, test, parents)
                cases += 1
            collections += 1

        self.logger.debug(f"Mapped {collections} collections and {cases} test cases from {source}")

    def _assign_collection_failure(self, collection: ET.Element, test: ReportEntry) -> None:
        failure = collection.find("failure")
        if failure is None:
            return

        message = _child_text(failure, "message")
        if not _is_blank(message):
            test.fail(message)

        stack_trace = _child_text(failure, "stack-trace")
        if not _is_blank(stack_trace):
            test.fail(code_block(stack_trace))

    def _map_case(self, case: ET.Element, test: ReportEntry,
                  parents: Dict[ET.Element, ET.Element]) -> None:
        node = test.create_node(case.get("name", ""), get_description(case))

        status = to_status(case.get("result"))
        node.log(status, build_status_message(case, status))

        categories = parse_tags(case, TagScope.RECURSIVE)
        suite = _parameterized_suite(case, parents)
        if suite is not None:
            categories |= parse_tags(suite, TagScope.DIRECT)
        for category in categories:
            node.assign_category(category)

        start_time = parse_timestamp(case.get("start-time"))
        if start_time is not None:
            node.start_time = start_time
        end_time = parse_timestamp(case.get("end-time"))
        if end_time is not None:
            node.end_time = end_time


def _parameterized_suite(case: ET.Element,
                         parents: Dict[ET.Element, ET.Element]) -> Optional[ET.Element]:
    """Nearest ``test-suite`` ancestor of type ParameterizedTest, if any."""
    current = parents.get(case)
    while current is not None:
        if current.tag == "test-suite" and current.get("type", "").casefold() == PARAMETERIZED_SUITE_TYPE:
            return current
        current = parents.get(current)
    return None
