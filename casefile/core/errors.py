"""Error hierarchy for the casefile test runner.

Errors fall into two groups:

1. **Resolution-time errors** (includes, document normalization, export
   lookup, module loading). These abort the offending document source.
2. **Execution-time errors** (mock verification, path resolution). These
   are scoped to a single case and reported as that case's failure.
"""

from pathlib import Path
from typing import Any


class CasefileError(Exception):
    """Base class for every error raised by the framework itself."""


# ============================================================================
# RESOLUTION-TIME ERRORS
# ============================================================================


class IncludeError(CasefileError):
    """Base class for `!include` resolution failures."""


class CircularInclusionError(IncludeError):
    """An include chain revisits a file that is still being loaded."""

    def __init__(self, path: Path | str, chain: list[str] | None = None):
        self.path = str(path)
        self.chain = list(chain or [])
        trail = " -> ".join([*self.chain, self.path]) if self.chain else self.path
        super().__init__(f"Circular dependency detected: {trail}")


class IncludeNotFoundError(IncludeError):
    """An `!include` directive points at a file that does not exist."""

    def __init__(self, path: Path | str, referenced_from: Path | str):
        self.path = str(path)
        self.referenced_from = str(referenced_from)
        super().__init__(
            f"Include file not found: {self.path} (referenced from {self.referenced_from})"
        )


class InvalidDocumentError(CasefileError):
    """A document has a recognized shape but malformed content."""

    def __init__(self, message: str, source: Path | str | None = None):
        self.source = str(source) if source is not None else None
        if self.source:
            message = f"{message} (in {self.source})"
        super().__init__(message)


class ModuleLoadError(CasefileError):
    """The module under test could not be located or imported."""

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load module {self.path}: {reason}")


class UndefinedExportError(CasefileError):
    """The requested export does not exist in the module under test."""

    def __init__(self, export_name: str, module_path: Path | str | None = None):
        self.export_name = export_name
        self.module_path = str(module_path) if module_path is not None else None
        where = f" in {self.module_path}" if self.module_path else ""
        super().__init__(f"Export '{export_name}' is not defined{where}")


# ============================================================================
# EXECUTION-TIME ERRORS
# ============================================================================


class MockError(CasefileError):
    """Base class for mock verification failures."""

    def __init__(self, mock_name: str, message: str):
        self.mock_name = mock_name
        super().__init__(message)


class MockArgumentMismatchError(MockError):
    """A mock was invoked with arguments other than the expected ones."""

    def __init__(self, mock_name: str, expected: Any, actual: Any):
        self.expected = expected
        self.actual = actual
        super().__init__(
            mock_name,
            f"Expected {mock_name}({_render_args(expected)}) "
            f"but got {mock_name}({_render_args(actual)})",
        )


class MockCallCountError(MockError):
    """A mock was invoked more or fewer times than declared."""

    def __init__(self, mock_name: str, actual_calls: int, expected_calls: int):
        self.actual_calls = actual_calls
        self.expected_calls = expected_calls
        super().__init__(
            mock_name,
            f"Mock '{mock_name}' was called {actual_calls} time(s) "
            f"but expected exactly {expected_calls} calls",
        )


class UndefinedMockReferenceError(MockError):
    """A `$mock:<name>` reference names a mock that is not defined."""

    def __init__(self, mock_name: str):
        super().__init__(mock_name, f"Mock '{mock_name}' is referenced but not defined")


class PathResolutionError(CasefileError):
    """Base class for dot-path resolution failures."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class PathSegmentMissingError(PathResolutionError):
    """A segment of a dot-path is absent on the object graph."""

    def __init__(self, segment: str, path: str):
        self.segment = segment
        super().__init__(path, f"Property '{segment}' not found in path '{path}'")


class NotCallableError(PathResolutionError):
    """The terminal segment of a method path is not callable."""

    def __init__(self, segment: str, path: str):
        self.segment = segment
        super().__init__(path, f"'{segment}' is not a function in path '{path}'")


class CaseFailure(CasefileError):
    """Raised to surface a failed case to an external harness."""


class MockRaisedError(Exception):
    """Raised by a mock whose expected call declares `throws`.

    Not a CasefileError: the unit under test may catch and handle it like
    any other exception.
    """


def _render_args(args: Any) -> str:
    if isinstance(args, (list, tuple)):
        return ", ".join(repr(arg) for arg in args)
    return repr(args)
