"""Filesystem discovery of document sources.

Implements DiscoveryPort by walking a directory tree and keeping the
files whose names end with one of the recognized suffixes.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from casefile.core.ports import DiscoveryPort

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".test.yaml", ".test.yml", ".spec.yaml", ".spec.yml")

# Directories that never hold document sources
SKIPPED_DIRS = frozenset({".git", ".hg", ".venv", "venv", "node_modules", "__pycache__"})


class FilesystemDiscovery(DiscoveryPort):
    """Finds document sources below a root directory."""

    def __init__(self, suffixes: Iterable[str] = DEFAULT_SUFFIXES):
        self.suffixes = tuple(suffixes)

    def matches(self, path: Path) -> bool:
        return path.name.endswith(self.suffixes)

    def discover(self, root: Path) -> list[Path]:
        """Return matching files below `root`, sorted by path.

        A file passed as `root` is returned as-is, whatever its name.
        """
        root = Path(root)
        if root.is_file():
            return [root]
        if not root.is_dir():
            logger.warning(f"Discovery root does not exist: {root}")
            return []

        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
            for filename in filenames:
                candidate = Path(dirpath) / filename
                if self.matches(candidate):
                    found.append(candidate)

        found.sort()
        logger.debug(f"Discovered {len(found)} source(s) below {root}")
        return found
