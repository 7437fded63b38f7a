"""Tests for the stdout reporter."""

import io
from pathlib import Path

import pytest

from casefile.adapters.reporting.stdout import StdoutReporter
from casefile.core.errors import CircularInclusionError
from casefile.core.models import CaseResult, RunSummary


def finished(case: str, *failures: str) -> CaseResult:
    result = CaseResult(group="math", suite="add", case=case)
    result.mark_running()
    for failure in failures:
        result.record_failure(failure)
    result.finish()
    return result


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


class TestStdoutReporter:
    """Test StdoutReporter output."""

    def test_failures_only_by_default(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(stream=stream)

        reporter.start_group("math")
        reporter.start_group("add")
        reporter.report_case(finished("passes"))
        reporter.report_case(finished("fails", "add returned 2, expected 3"))
        reporter.end_group("add")
        reporter.end_group("math")

        assert stream.getvalue().splitlines() == [
            "math",
            "  add",
            "    [FAIL] fails",
            "        add returned 2, expected 3",
        ]

    def test_verbose_lists_passes(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(verbose=True, stream=stream)

        reporter.start_group("add")
        reporter.report_case(finished("passes"))
        reporter.end_group("add")

        assert "  [PASS] passes" in stream.getvalue().splitlines()

    def test_multiline_failures_are_indented(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(stream=stream)
        reporter.report_case(finished("two problems", "first\nsecond", "third"))

        assert stream.getvalue().splitlines() == [
            "[FAIL] two problems",
            "    first",
            "    second",
            "    third",
        ]

    def test_source_error(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(stream=stream)
        reporter.report_source_error(Path("a.test.yaml"), CircularInclusionError("a.yaml", ["b.yaml"]))

        output = stream.getvalue()
        assert "ERROR loading a.test.yaml" in output
        assert "CircularInclusionError: Circular dependency detected: b.yaml -> a.yaml" in output

    def test_summary(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(stream=stream)
        reporter.report_summary(RunSummary(sources=3, sources_failed=1, cases_passed=4, cases_failed=0, cases_skipped=2))

        output = stream.getvalue()
        assert "Sources: 3 (1 failed to load)" in output
        assert "Cases passed: 4" in output
        assert "Cases skipped: 2" in output
        assert "Result: FAILED" in output

    def test_summary_ok(self, stream: io.StringIO) -> None:
        reporter = StdoutReporter(stream=stream)
        reporter.report_summary(RunSummary(sources=1, sources_failed=0, cases_passed=1, cases_failed=0))

        output = stream.getvalue()
        assert "Result: OK" in output
        assert "skipped" not in output

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        StdoutReporter().start_group("to stdout")
        assert capsys.readouterr().out == "to stdout\n"
