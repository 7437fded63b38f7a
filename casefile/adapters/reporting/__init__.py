"""Reporter adapters."""

from .stdout import StdoutReporter

__all__ = ["StdoutReporter"]
