"""
Report generator for multiple output formats.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional

from xunit_reporter.core.errors import ConfigurationError
from xunit_reporter.reporting.models import Report, ReportEntry, Status

SUPPORTED_FORMATS = ("json", "md")

_TEXTAREA_RE = re.compile(r'<textarea readonly class="code-block">(.*?)</textarea>', re.DOTALL)


def _unescape_html(text: str) -> str:
    return (text.replace("&#x27;", "'")
               .replace("&quot;", '"')
               .replace("&gt;", ">")
               .replace("&lt;", "<")
               .replace("&amp;", "&"))


def _table_cell(text: str) -> str:
    """Keep a value on one Markdown table row."""
    return " ".join(text.replace("|", "\\|").split())


def _report_filename(name: str) -> str:
    """Turn a report name into a safe file stem."""
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("._")
    return stem or "report"


class ReportGenerator:
    """Generate report files in multiple formats."""

    def __init__(self, output_dir: Path = Path("reports")):
        self.output_dir = Path(output_dir)

    def _report_path(self, report: Report, extension: str) -> Path:
        """Return path for report file; ensure output dir exists."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / f"{_report_filename(report.name)}.{extension}"

    def generate_reports(self,
                         report: Report,
                         formats: Optional[List[str]] = None) -> Dict[str, Path]:
        """
        Generate reports in specified formats.

        Args:
            report: Report object
            formats: List of formats to generate (json, md)

        Returns:
            Dictionary mapping format to output file path

        Raises:
            ConfigurationError: If a format is not supported
        """
        if formats is None:
            formats = ["json"]

        generated_files = {}
        for format_type in formats:
            if format_type == "json":
                generated_files["json"] = self._generate_json_report(report)
            elif format_type == "md":
                generated_files["md"] = self._generate_markdown_report(report)
            else:
                raise ConfigurationError(
                    f"Unsupported report format: {format_type} (expected one of {', '.join(SUPPORTED_FORMATS)})"
                )
        return generated_files

    def _generate_json_report(self, report: Report) -> Path:
        file_path = self._report_path(report, "json")
        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2)
        return file_path

    def _generate_markdown_report(self, report: Report) -> Path:
        file_path = self._report_path(report, "md")
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(self._create_markdown_content(report))
        return file_path

    def _format_details(self, details: str) -> str:
        """Render log details for Markdown, turning code blocks into fences."""
        match = _TEXTAREA_RE.fullmatch(details)
        if match:
            return f"```\n{_unescape_html(match.group(1))}\n```"
        return details

    def _case_row(self, node: ReportEntry) -> str:
        categories = _table_cell(", ".join(sorted(node.categories))) or "-"
        duration = f"{node.duration:.3f}" if node.duration is not None else "-"
        name = _table_cell(node.name)
        return f"| {name} | {node.status} | {categories} | {duration} |"

    def _create_markdown_content(self, report: Report) -> str:
        lines = [
            f"# {report.name}",
            "",
            f"**Created:** {report.created.strftime('%Y-%m-%d %H:%M:%S')}",
            f"**Status:** {report.status}",
            f"**Summary:** {report.summary}",
            "",
        ]

        if report.source_files:
            lines.append("## Source Files")
            lines.extend(f"- `{path}`" for path in report.source_files)
            lines.append("")

        if report.system_info:
            lines.append("## System Information")
            lines.extend(f"- **{key}:** {value}" for key, value in report.system_info.items())
            lines.append("")

        lines.append("## Status Counts")
        lines.append("| Status | Count |")
        lines.append("|--------|-------|")
        for status_name, count in report.get_status_counts().items():
            if count > 0:
                lines.append(f"| {status_name} | {count} |")
        lines.append("")

        for test in report.tests:
            lines.append(f"## {test.name} ({test.status})")
            lines.append("")
            for entry in test.logs:
                lines.append(f"**{entry.status}:**")
                lines.append("")
                lines.append(self._format_details(entry.details))
                lines.append("")

            if test.children:
                lines.append("| Test | Status | Categories | Duration (s) |")
                lines.append("|------|--------|------------|--------------|")
                lines.extend(self._case_row(node) for node in test.children)
                lines.append("")

            failed = [node for node in test.children if node.status in (Status.FAIL, Status.ERROR)]
            for node in failed:
                lines.append(f"### {node.name}")
                if node.description:
                    lines.append(f"_{node.description}_")
                lines.append("")
                for entry in node.logs:
                    lines.append(self._format_details(entry.details))
                    lines.append("")

        return "\n".join(lines)
