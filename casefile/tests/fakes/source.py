"""Fake DocumentSourcePort and DiscoveryPort implementations for testing."""

from pathlib import Path
from typing import Any

from casefile.core.ports import DiscoveryPort, DocumentSourcePort


class FakeDocumentSource(DocumentSourcePort):
    """In-memory document source keyed by path.

    A value that is an Exception instance is raised when loaded, to
    simulate resolution failures.
    """

    def __init__(self, sources: dict[str, list[Any] | Exception] | None = None):
        self.sources: dict[str, list[Any] | Exception] = dict(sources or {})
        self.loaded: list[Path] = []

    def add(self, path: str, documents: list[Any] | Exception) -> None:
        self.sources[path] = documents

    async def load_documents(self, path: Path) -> list[Any]:
        self.loaded.append(Path(path))
        documents = self.sources[str(path)]
        if isinstance(documents, Exception):
            raise documents
        return list(documents)


class FakeDiscovery(DiscoveryPort):
    """Returns the fake source paths in insertion order."""

    def __init__(self, source: FakeDocumentSource):
        self.source = source

    def discover(self, root: Path) -> list[Path]:
        return [Path(path) for path in self.source.sources]
