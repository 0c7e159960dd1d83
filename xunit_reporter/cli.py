"""
Command-line interface for xUnit Reporter.

This module provides a subcommand-based CLI using Typer.
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer

from xunit_reporter.core.config import Config
from xunit_reporter.core.errors import XUnitReporterError
from xunit_reporter.core.logging import setup_logger
from xunit_reporter.core.pipeline import ConversionPipeline
from xunit_reporter.reporting.models import Report
from xunit_reporter.reporting.parser import ResultMapper

app = typer.Typer(
    name="xunit_reporter",
    help="Convert xUnit v2 test-result XML into JSON and Markdown reports",
    add_completion=False,
)


def get_config(
    verbosity: Optional[int] = None,
    config_file: Optional[Path] = None,
    **kwargs
) -> Config:
    """Create and configure Config object."""
    init_kwargs = {}
    if config_file:
        init_kwargs["config_file"] = config_file
    if verbosity is not None:
        init_kwargs["verbosity"] = verbosity
    for key, value in kwargs.items():
        if key in Config.__dataclass_fields__ and value is not None:
            init_kwargs[key] = value
    return Config(**init_kwargs)


def _fail(message: str) -> None:
    typer.echo(f"✗ {message}", err=True)
    sys.exit(1)


@app.command()
def convert(
    inputs: Optional[List[Path]] = typer.Option(None, "--input", "-i", help="xUnit results file (repeatable)"),
    input_dir: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory containing *.xml results files"),
    output_dir: Optional[Path] = typer.Option(None, "--output", "-o", help="Directory to save reports"),
    report_formats: Optional[List[str]] = typer.Option(None, "--format", "-f", help="Report formats (json, md)"),
    merge: bool = typer.Option(False, "--merge", help="Combine all inputs into a single report"),
    name: Optional[str] = typer.Option(None, "--name", help="Report name"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to xunit_reporter.toml"),
):
    """Convert results files into reports."""
    try:
        config = get_config(
            verbosity=verbosity, config_file=config_file,
            inputs=inputs or None, input_dir=input_dir, output_dir=output_dir,
            report_formats=report_formats or None, merge=merge or None, report_name=name,
        )
        setup_logger(verbosity=config.verbosity)
        written = ConversionPipeline(config).run()
    except XUnitReporterError as e:
        _fail(f"Conversion failed: {e}")

    for report_name, files in written.items():
        for fmt, path in files.items():
            typer.echo(f"{report_name} [{fmt}]: {path}")
    typer.echo(f"✓ Converted {len(written)} report(s)")


@app.command()
def inspect(
    results_file: Path = typer.Argument(..., help="xUnit results file"),
    verbosity: Optional[int] = typer.Option(None, "--verbosity", "-v", help="Verbosity level (0-3)"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Path to xunit_reporter.toml"),
):
    """Print a summary of one results file without writing reports."""
    try:
        config = get_config(verbosity=verbosity, config_file=config_file)
        setup_logger(verbosity=config.verbosity)
        report = Report(name=results_file.stem)
        ResultMapper(os_version_label=config.os_version_label).map_file(results_file, report)
    except XUnitReporterError as e:
        _fail(str(e))

    typer.echo(f"{report.name}: {report.summary}")
    for key, value in report.system_info.items():
        typer.echo(f"  {key}: {value}")
    for test in report.tests:
        typer.echo(f"  [{test.status}] {test.name} ({len(test.children)} tests)")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
