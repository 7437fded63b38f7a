"""Fake ReporterPort implementation for testing."""

from pathlib import Path

from casefile.core.models import CaseResult, RunSummary
from casefile.core.ports import ReporterPort


class FakeReporter(ReporterPort):
    """In-memory reporter for testing.

    Captures every group, case, source error and summary for assertions.
    """

    def __init__(self):
        """Initialize with empty history."""
        self.events: list[tuple[str, str]] = []
        self.results: list[CaseResult] = []
        self.source_errors: list[tuple[Path, Exception]] = []
        self.summaries: list[RunSummary] = []

    def start_group(self, name: str) -> None:
        self.events.append(("start", name))

    def end_group(self, name: str) -> None:
        self.events.append(("end", name))

    def report_case(self, result: CaseResult) -> None:
        self.events.append(("case", result.case))
        self.results.append(result)

    def report_source_error(self, path: Path, error: Exception) -> None:
        self.source_errors.append((path, error))

    def report_summary(self, summary: RunSummary) -> None:
        self.summaries.append(summary)

    def result_for(self, case_name: str) -> CaseResult:
        """Get the result of the case with the given name."""
        for result in self.results:
            if result.case == case_name:
                return result
        raise KeyError(case_name)

    @property
    def passed(self) -> list[str]:
        return [result.case for result in self.results if result.passed]

    @property
    def failed(self) -> list[str]:
        return [result.case for result in self.results if not result.passed]
