"""
Conversion pipeline for xUnit Reporter.

Discovers results files, maps each one into a report and writes the reports
in the configured formats.
"""

import time
from pathlib import Path
from typing import Dict, List

from xunit_reporter.core.config import Config
from xunit_reporter.core.discovery import find_results_files
from xunit_reporter.core.logging import get_logger
from xunit_reporter.reporting.generator import ReportGenerator
from xunit_reporter.reporting.models import Report
from xunit_reporter.reporting.parser import ResultMapper

MERGED_REPORT_NAME = "index"


class ConversionPipeline:
    """Convert xUnit results files into reports."""

    def __init__(self, config: Config):
        """
        Initialize the pipeline with configuration.

        Args:
            config: Configuration object
        """
        self.config = config
        self.logger = get_logger(__name__)
        self.mapper = ResultMapper(os_version_label=config.os_version_label)
        self.generator = ReportGenerator(config.output_dir)

    def build_reports(self) -> List[Report]:
        """
        Map every discovered results file into reports without writing them.

        Returns one merged report when ``merge`` is set, otherwise one report
        per results file.

        Raises:
            NoInputError: If no results files were found
            MalformedInputError: On the first file without a root element
        """
        files = find_results_files(self.config.inputs, self.config.input_dir)
        if self.config.verbosity >= 1:
            self.logger.info(f"Found {len(files)} results file(s)")

        if self.config.merge:
            report = Report(name=self.config.report_name or MERGED_REPORT_NAME)
            for path in files:
                self._map_into(path, report)
            return [report]

        reports = []
        for path in files:
            report = Report(name=self._report_name(path, len(files)))
            self._map_into(path, report)
            reports.append(report)
        return reports

    def run(self) -> Dict[str, Dict[str, Path]]:
        """
        Convert all inputs and write the reports.

        Returns:
            Mapping of report name to {format: written path}
        """
        start_time = time.time()
        written: Dict[str, Dict[str, Path]] = {}

        for report in self.build_reports():
            files = self.generator.generate_reports(report, self.config.report_formats)
            written[report.name] = files
            for fmt, path in files.items():
                self.logger.info(f"Wrote {fmt} report: {path}")

        duration = time.time() - start_time
        if self.config.verbosity >= 1:
            self.logger.info(f"Converted {len(written)} report(s) in {duration:.2f} seconds")
        return written

    def _report_name(self, path: Path, total: int) -> str:
        if self.config.report_name and total == 1:
            return self.config.report_name
        if self.config.report_name:
            return f"{self.config.report_name}-{path.stem}"
        return path.stem

    def _map_into(self, path: Path, report: Report) -> None:
        if self.config.verbosity >= 2:
            self.logger.info(f"Mapping {path}")
        self.mapper.map_file(path, report)
        report.source_files.append(path)
