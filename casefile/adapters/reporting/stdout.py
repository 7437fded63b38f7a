"""Stdout reporter.

Implements ReporterPort by printing results to the terminal with
human-readable formatting: nested groups are indented, failed cases
carry their failure messages below them.
"""

from pathlib import Path
from typing import TextIO

from casefile.core.models import CaseResult, RunSummary
from casefile.core.ports import ReporterPort

INDENT = "  "


class StdoutReporter(ReporterPort):
    """Prints run results to stdout (or any text stream)."""

    def __init__(self, verbose: bool = False, stream: TextIO | None = None):
        """Initialize stdout reporter.

        Args:
            verbose: If True, list passing cases too, not only failures.
            stream: Target stream; defaults to sys.stdout at print time.
        """
        self.verbose = verbose
        self.stream = stream
        self._depth = 0

    def start_group(self, name: str) -> None:
        if name:
            self._print(f"{INDENT * self._depth}{name}")
        self._depth += 1

    def end_group(self, name: str) -> None:
        self._depth = max(0, self._depth - 1)

    def report_case(self, result: CaseResult) -> None:
        if result.passed and not self.verbose:
            return
        self._print(self._format_case(result, self._depth))

    def report_source_error(self, path: Path, error: Exception) -> None:
        lines = [
            "-" * 80,
            f"ERROR loading {path}",
            f"{type(error).__name__}: {error}",
            "-" * 80,
        ]
        self._print("\n".join(lines))

    def report_summary(self, summary: RunSummary) -> None:
        self._print(self._format_summary(summary))

    @staticmethod
    def _format_case(result: CaseResult, depth: int) -> str:
        """Format one case line plus indented failure messages."""
        marker = "PASS" if result.passed else "FAIL"
        lines = [f"{INDENT * depth}[{marker}] {result.case}"]
        for failure in result.failures:
            for line in failure.splitlines():
                lines.append(f"{INDENT * (depth + 2)}{line}")
        return "\n".join(lines)

    @staticmethod
    def _format_summary(summary: RunSummary) -> str:
        """Format the run totals."""
        lines = [
            "=" * 80,
            "SUMMARY",
            "=" * 80,
            f"Sources: {summary.sources} ({summary.sources_failed} failed to load)",
            f"Cases passed: {summary.cases_passed}",
            f"Cases failed: {summary.cases_failed}",
        ]
        if summary.cases_skipped:
            lines.append(f"Cases skipped: {summary.cases_skipped}")
        lines.append("Result: " + ("OK" if summary.ok else "FAILED"))
        lines.append("=" * 80)
        return "\n".join(lines)

    def _print(self, text: str) -> None:
        print(text, file=self.stream)
