from pathlib import Path

import pytest

SAMPLE_RESULTS = """<?xml version="1.0" encoding="utf-8"?>
<assemblies timestamp="01/02/2024 03:04:05">
  <assembly name="Sample.Tests.dll" os-version="Linux 6.1" test-framework="xUnit.net 2.4.2" environment="64-bit .NET 8.0">
    <collection name="Test collection for Sample.Tests.MathTests" total="3">
      <test name="Sample.Tests.MathTests.Adds" result="Pass" start-time="2024-01-02T03:04:05" end-time="2024-01-02T03:04:06.5">
        <traits />
        <categories>
          <category name="Fast" />
        </categories>
      </test>
      <test name="Sample.Tests.MathTests.Divides" result="Fail">
        <failure exception-type="Xunit.Sdk.EqualException">
          <message>expected 1 got 2</message>
          <stack-trace>   at MathTests.Divides() in MathTests.cs:line 12   </stack-trace>
        </failure>
      </test>
      <test name="Sample.Tests.MathTests.Later" result="Skip">
        <reason><message>not implemented</message></reason>
      </test>
    </collection>
    <collection name="Test collection for Sample.Tests.IoTests" total="1">
      <test name="Sample.Tests.IoTests.Reads" result="Pass" />
    </collection>
  </assembly>
</assemblies>
"""


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's xunit_reporter.toml out of the tests."""
    monkeypatch.delenv("XUNIT_REPORTER_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def results_file(tmp_path: Path) -> Path:
    path = tmp_path / "results" / "sample.xml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SAMPLE_RESULTS, encoding="utf-8")
    return path
