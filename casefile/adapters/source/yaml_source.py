"""YAML document source with `!include` support.

Implements DocumentSourcePort on top of PyYAML. A file may hold several
documents separated by ``---``. The custom ``!include <path>`` tag can
replace a whole document or any single value inside one; the path is
resolved relative to the directory of the file containing the tag.

Cycle detection follows the active inclusion chain only: every nested
load receives its own copy of the chain, so two sibling branches may
include the same file while a file that includes one of its own
ancestors fails with CircularInclusionError.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

import yaml

from casefile.core.errors import (
    CircularInclusionError,
    IncludeNotFoundError,
    InvalidDocumentError,
)
from casefile.core.ports import DocumentSourcePort

logger = logging.getLogger(__name__)

INCLUDE_TAG = "!include"


class _IncludeLoader(yaml.SafeLoader):
    """SafeLoader that knows which file it reads and which files are open."""

    def __init__(
        self,
        stream: str,
        source_path: Path,
        chain: tuple[Path, ...],
        resolver: "IncludeResolver",
    ):
        super().__init__(stream)
        self.source_path = source_path
        self.chain = chain
        self.resolver = resolver


def _construct_include(loader: _IncludeLoader, node: yaml.Node) -> Any:
    relative = loader.construct_scalar(node)  # type: ignore[arg-type]
    target = loader.source_path.parent / str(relative)
    if not target.is_file():
        raise IncludeNotFoundError(target, loader.source_path)
    return loader.resolver.load(target, loader.chain)


_IncludeLoader.add_constructor(INCLUDE_TAG, _construct_include)


class IncludeResolver:
    """Loads a YAML file and expands its `!include` references."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def load(self, path: Path | str, chain: tuple[Path, ...] = ()) -> Any:
        """Load one file.

        Args:
            path: File to load.
            chain: Canonical paths currently open on this inclusion chain.

        Returns:
            The single document, a list of documents when the file holds
            more than one, or None for an empty file.

        Raises:
            CircularInclusionError: If `path` is already on the chain.
            IncludeNotFoundError: If a nested include target is missing.
            InvalidDocumentError: If the file cannot be decoded or is not
                valid YAML.
        """
        canonical = Path(path).resolve()
        if canonical in chain:
            raise CircularInclusionError(canonical, [str(p) for p in chain])

        try:
            text = canonical.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise InvalidDocumentError(f"Cannot decode: {e}", canonical) from e
        loader = _IncludeLoader(text, canonical, chain + (canonical,), self)
        documents: list[Any] = []
        try:
            while loader.check_data():
                documents.append(loader.get_data())
        except yaml.YAMLError as e:
            raise InvalidDocumentError(f"Invalid YAML: {e}", canonical) from e
        finally:
            loader.dispose()

        logger.debug(f"Loaded {len(documents)} document(s) from {canonical}")
        if not documents:
            return None
        if len(documents) == 1:
            return documents[0]
        return documents


def flatten_documents(loaded: Any) -> list[Any]:
    """Flatten document-level lists into one flat document stream.

    Lists appear at document level when a whole document is an include
    of a multi-document file (or of a file whose content is a list).
    """
    if not isinstance(loaded, list):
        return [loaded]

    flat: list[Any] = []
    pending = list(reversed(loaded))
    while pending:
        item = pending.pop()
        if isinstance(item, list):
            pending.extend(reversed(item))
        else:
            flat.append(item)
    return flat


class YamlDocumentSource(DocumentSourcePort):
    """Reads document sources from the local filesystem."""

    def __init__(self, encoding: str = "utf-8"):
        self.resolver = IncludeResolver(encoding=encoding)

    async def load_documents(self, path: Path) -> list[Any]:
        """Load, include-resolve and flatten one source file."""
        loaded = await asyncio.to_thread(self.resolver.load, path)
        return flatten_documents(loaded)
