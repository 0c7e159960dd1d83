from pathlib import Path

import pytest

from xunit_reporter.core.config import Config
from xunit_reporter.core.errors import ConfigurationError


def _write_toml(path: Path, body: str) -> Path:
    path.write_text(body)
    return path


def test_defaults(tmp_path: Path) -> None:
    config = Config()
    assert config.output_dir == tmp_path / "reports"
    assert config.report_formats == ["json"]
    assert config.merge is False
    assert config.os_version_label == "NUnit Version"
    assert config.config_file is None


def test_loads_defaults_from_working_directory(tmp_path: Path) -> None:
    _write_toml(tmp_path / "xunit_reporter.toml", """
[xunit_reporter]
report_formats = ["json", "md"]
merge = true
output_dir = "site"
os_version_label = "OS Version"
""")
    config = Config()
    assert config.report_formats == ["json", "md"]
    assert config.merge is True
    assert config.output_dir == tmp_path / "site"
    assert config.os_version_label == "OS Version"
    assert config.config_file == tmp_path / "xunit_reporter.toml"


def test_tool_table_and_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_toml(tmp_path / "pyproject.toml", """
[tool.xunit_reporter]
verbosity = 2
""")
    monkeypatch.setenv("XUNIT_REPORTER_CONFIG", str(path))
    assert Config().verbosity == 2


def test_explicit_values_win_over_file(tmp_path: Path) -> None:
    path = _write_toml(tmp_path / "custom.toml", """
[xunit_reporter]
output_dir = "from-file"
report_name = "from-file"
""")
    config = Config(config_file=path, output_dir=tmp_path / "mine")
    assert config.output_dir == tmp_path / "mine"
    assert config.report_name == "from-file"


def test_explicit_default_values_win_over_file(tmp_path: Path) -> None:
    path = _write_toml(tmp_path / "custom.toml", """
[xunit_reporter]
verbosity = 3
report_formats = ["md"]
output_dir = "from-file"
merge = true
""")
    config = Config(config_file=path, verbosity=0, report_formats=["json"],
                    output_dir=Path("reports"), merge=False)
    assert config.verbosity == 0
    assert config.report_formats == ["json"]
    assert config.output_dir == tmp_path / "reports"
    assert config.merge is False


def test_missing_explicit_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        Config(config_file=tmp_path / "nope.toml")


def test_unreadable_config_file_raises(tmp_path: Path) -> None:
    path = _write_toml(tmp_path / "bad.toml", "[xunit_reporter\n")
    with pytest.raises(ConfigurationError, match="Failed to read config file"):
        Config(config_file=path)


def test_rejects_unknown_format() -> None:
    with pytest.raises(ConfigurationError, match="html"):
        Config(report_formats=["html"])


def test_rejects_bad_verbosity() -> None:
    with pytest.raises(ConfigurationError):
        Config(verbosity=5)


def test_dict_round_trip(tmp_path: Path) -> None:
    config = Config(inputs=[tmp_path / "a.xml"], report_formats=["md"], merge=True)
    restored = Config.from_dict(config.to_dict())
    assert restored.to_dict() == config.to_dict()
