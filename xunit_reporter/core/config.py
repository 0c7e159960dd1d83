"""
Configuration management for xUnit Reporter.
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, fields

from xunit_reporter.core.errors import ConfigurationError
from xunit_reporter.reporting.generator import SUPPORTED_FORMATS
from xunit_reporter.reporting.parser import DEFAULT_OS_VERSION_LABEL

PATH_KEYS = frozenset({"input_dir", "output_dir", "config_file"})

CONFIG_ENV_VAR = "XUNIT_REPORTER_CONFIG"
DEFAULT_CONFIG_FILENAME = "xunit_reporter.toml"

FIELD_DEFAULTS: Dict[str, Any] = {
    "inputs": [],
    "output_dir": Path("reports"),
    "report_formats": ["json"],
    "merge": False,
    "os_version_label": DEFAULT_OS_VERSION_LABEL,
    "verbosity": 0,
}


@dataclass
class Config:
    """
    Configuration class for xUnit Reporter.

    Fields left as ``None`` are filled from the config file first and then
    from ``FIELD_DEFAULTS``, so any value the caller passes wins over the file.
    """

    # Inputs
    inputs: Optional[List[Path]] = None
    input_dir: Optional[Path] = None
    config_file: Optional[Path] = None

    # Output
    output_dir: Optional[Path] = None
    report_formats: Optional[list] = None
    report_name: Optional[str] = None
    merge: Optional[bool] = None

    # Mapping
    os_version_label: Optional[str] = None

    verbosity: Optional[int] = None  # 0=warnings, 1=progress, 2=per-file detail, 3=debug

    def __post_init__(self):
        """Post-initialization processing."""
        self._load_config_file()
        for key, value in Config.defaults().items():
            if getattr(self, key) is None:
                setattr(self, key, value)

        self.inputs = [Path(p).resolve() for p in self.inputs]
        if self.input_dir is not None:
            self.input_dir = Path(self.input_dir).resolve()
        self.output_dir = Path(self.output_dir).resolve()

        if isinstance(self.report_formats, str):
            self.report_formats = [self.report_formats]
        self.report_formats = [fmt.lower() for fmt in self.report_formats]
        unknown = [fmt for fmt in self.report_formats if fmt not in SUPPORTED_FORMATS]
        if unknown:
            raise ConfigurationError(
                f"Unsupported report format(s): {', '.join(unknown)} "
                f"(expected one of {', '.join(SUPPORTED_FORMATS)})"
            )

        if not isinstance(self.verbosity, int) or not 0 <= self.verbosity <= 3:
            raise ConfigurationError(f"verbosity must be between 0 and 3, got {self.verbosity}")

    def _load_config_file(self) -> None:
        """Load defaults from xunit_reporter.toml if present."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if self.config_file is not None:
            self.config_file = Path(self.config_file).resolve()
            if not self.config_file.exists():
                raise ConfigurationError(f"Config file does not exist: {self.config_file}")
        else:
            candidate = Path(env_path).resolve() if env_path else Path.cwd() / DEFAULT_CONFIG_FILENAME
            if not candidate.exists():
                return
            self.config_file = candidate

        try:
            try:
                import tomllib  # Python 3.11+
            except ModuleNotFoundError:  # Python 3.9-3.10
                import tomli as tomllib

            data = tomllib.loads(self.config_file.read_text())
        except Exception as e:
            raise ConfigurationError(f"Failed to read config file: {self.config_file}: {e}") from e

        table = data.get("xunit_reporter") or data.get("tool", {}).get("xunit_reporter", {})
        if not isinstance(table, dict):
            return

        names = {f.name for f in fields(Config)}
        for key, value in table.items():
            if key == "config_file" or key not in names or value is None:
                continue
            if getattr(self, key) is not None:
                continue
            if key in PATH_KEYS:
                value = Path(value)
            elif key == "inputs":
                value = [Path(p) for p in value]
            setattr(self, key, value)

    @staticmethod
    def defaults() -> Dict[str, Any]:
        """Value used for each field that neither the caller nor the file sets."""
        return {key: list(value) if isinstance(value, list) else value
                for key, value in FIELD_DEFAULTS.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "inputs": [str(p) for p in self.inputs],
            "input_dir": str(self.input_dir) if self.input_dir else None,
            "config_file": str(self.config_file) if self.config_file else None,
            "output_dir": str(self.output_dir),
            "report_formats": self.report_formats,
            "report_name": self.report_name,
            "merge": self.merge,
            "os_version_label": self.os_version_label,
            "verbosity": self.verbosity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create configuration from dictionary."""
        data = dict(data)
        for key in PATH_KEYS:
            if key in data and isinstance(data[key], str):
                data[key] = Path(data[key])
        if "inputs" in data:
            data["inputs"] = [Path(p) for p in data["inputs"]]
        return cls(**data)
