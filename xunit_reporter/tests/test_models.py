from datetime import datetime, timezone

import pytest

from xunit_reporter.reporting.markup import code_block
from xunit_reporter.reporting.models import Report, Status, to_status


@pytest.mark.parametrize("raw,expected", [
    ("Pass", Status.PASS),
    ("passed", Status.PASS),
    ("FAIL", Status.FAIL),
    ("Failed", Status.FAIL),
    ("Error", Status.ERROR),
    ("Skip", Status.SKIP),
    ("NotExecuted", Status.SKIP),
    (" skipped ", Status.SKIP),
    ("Inconclusive", Status.WARNING),
    ("something-else", Status.INFO),
    (None, Status.INFO),
])
def test_to_status(raw, expected):
    assert to_status(raw) is expected


def test_status_string_is_capitalised_name():
    assert str(Status.PASS) == "Pass"
    assert str(Status.ERROR) == "Error"


def test_code_block_escapes_text():
    markup = code_block('<a href="x">&</a>')
    assert markup.get_markup() == (
        '<textarea readonly class="code-block">'
        '&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;'
        '</textarea>'
    )
    assert str(markup) == markup.get_markup()


def test_entry_status_is_most_severe_of_logs_and_children():
    report = Report()
    test = report.create_test("suite")
    test.info("setup output")
    test.create_node("a").log(Status.PASS, "Pass")
    assert test.status is Status.PASS

    test.create_node("b").log(Status.SKIP, "Skip")
    assert test.status is Status.SKIP

    test.create_node("c").log(Status.FAIL, "boom")
    assert test.status is Status.FAIL
    assert report.status is Status.FAIL


def test_entry_with_only_info_logs_is_info():
    test = Report().create_test("suite")
    assert test.status is Status.PASS
    test.info("note")
    assert test.status is Status.INFO


def test_assign_category_ignores_duplicates():
    node = Report().create_test("suite").create_node("case", "does things")
    node.assign_category("Smoke", "Fast")
    node.assign_category("Smoke")
    assert node.categories == ["Smoke", "Fast"]
    assert node.description == "does things"


def test_duration_requires_both_timestamps():
    node = Report().create_test("suite").create_node("case")
    assert node.duration is None
    node.start_time = datetime(2024, 1, 1, 0, 0, 0)
    node.end_time = datetime(2024, 1, 1, 0, 0, 2, 500000)
    assert node.duration == 2.5

    node.end_time = datetime(2024, 1, 1, 0, 0, 3, tzinfo=timezone.utc)
    assert node.duration is None


def test_status_counts_and_summary():
    report = Report()
    test = report.create_test("suite")
    test.create_node("a").log(Status.PASS, "Pass")
    test.create_node("b").log(Status.PASS, "Pass")
    test.create_node("c").log(Status.FAIL, "boom")
    test.create_node("d").log(Status.SKIP, "later")

    counts = report.get_status_counts()
    assert counts["Pass"] == 2
    assert counts["Fail"] == 1
    assert counts["Skip"] == 1
    assert counts["Error"] == 0
    assert report.summary == "Tests: 4 total, 2 pass (50.0%), 1 fail (25.0%), 1 skip (25.0%)"


def test_empty_report_summary():
    assert Report().summary == "No test cases found"


def test_to_dict_omits_empty_fields():
    report = Report(name="run")
    report.add_system_info("NUnit Version", "Linux")
    test = report.create_test("suite")
    node = test.create_node("case")
    node.log(Status.PASS, "Pass")
    node.start_time = datetime(2024, 1, 1, 0, 0, 0)

    data = report.to_dict()
    assert data["name"] == "run"
    assert data["system_info"] == {"NUnit Version": "Linux"}
    case = data["tests"][0]["children"][0]
    assert case["name"] == "case"
    assert case["status"] == "Pass"
    assert case["start_time"] == "2024-01-01T00:00:00"
    assert "end_time" not in case
    assert "categories" not in case
    assert "description" not in case
    assert case["logs"][0]["details"] == "Pass"
