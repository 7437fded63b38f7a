"""Port interfaces for the casefile test runner.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - DocumentSourcePort: Load an include-resolved document stream
   - ModuleLoaderPort: Import the module under test
   - DiscoveryPort: Find document sources below a directory
   - ReporterPort: Hand results to the external test harness

2. **Driving Ports** (adapters/external systems call into core)
   - RunPort: Entry point for running discovered sources
"""

from abc import ABC, abstractmethod
from pathlib import Path
from types import ModuleType
from typing import Any

from .models import CaseResult, RunSummary, TestConfig


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class DocumentSourcePort(ABC):
    """Port for reading a document source from storage.

    Implementations must:
    - Expand `!include` directives relative to the including file
    - Detect include cycles along the active inclusion chain
    - Flatten multi-document includes into one flat stream
    """

    @abstractmethod
    async def load_documents(self, path: Path) -> list[Any]:
        """Load the ordered, flat document stream for one source file.

        Args:
            path: Path of the document source.

        Returns:
            List of documents in source order. Each document is whatever
            the parser produced (usually a mapping).

        Raises:
            IncludeError: If an include is missing or circular.
        """


class ModuleLoaderPort(ABC):
    """Port for importing the module under test."""

    @abstractmethod
    async def load_module(self, target: str, relative_to: Path) -> ModuleType:
        """Import the module identified by the header's `file` field.

        Args:
            target: Module path as written in the header document.
            relative_to: Directory of the document source.

        Returns:
            The imported module object.

        Raises:
            ModuleLoadError: If the module cannot be found or imported.
        """


class DiscoveryPort(ABC):
    """Port for locating document sources."""

    @abstractmethod
    def discover(self, root: Path) -> list[Path]:
        """Return every document source below `root`, in a stable order."""


class ReporterPort(ABC):
    """Port for the external reporting harness.

    The core decides pass/fail and builds failure messages; reporters
    only present them.
    """

    @abstractmethod
    def start_group(self, name: str) -> None:
        """Open a named group (a source group or a suite)."""

    @abstractmethod
    def end_group(self, name: str) -> None:
        """Close the most recently opened group."""

    @abstractmethod
    def report_case(self, result: CaseResult) -> None:
        """Report one finished case."""

    @abstractmethod
    def report_source_error(self, path: Path, error: Exception) -> None:
        """Report a source whose resolution failed before any case ran."""

    @abstractmethod
    def report_summary(self, summary: RunSummary) -> None:
        """Report the totals of a run."""


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class RunPort(ABC):
    """Port for running document sources end to end."""

    @abstractmethod
    async def prepare(self, path: Path) -> tuple[TestConfig, ModuleType]:
        """Resolve one source into its config and imported module.

        Raises:
            CasefileError: On any resolution-time failure.
        """

    @abstractmethod
    async def run_path(self, path: Path) -> RunSummary:
        """Discover and run every source below `path` (or `path` itself)."""
