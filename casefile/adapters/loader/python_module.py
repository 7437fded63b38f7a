"""Dynamic import of the module under test.

Implements ModuleLoaderPort. The header's `file` field is resolved
relative to the directory of the document source and imported under a
private module name, so two sources targeting files with the same
basename never collide in `sys.modules`.
"""

import asyncio
import hashlib
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from casefile.core.errors import ModuleLoadError
from casefile.core.ports import ModuleLoaderPort

logger = logging.getLogger(__name__)

MODULE_PREFIX = "casefile_target_"


class PythonModuleLoader(ModuleLoaderPort):
    """Imports Python source files, or dotted module names as a fallback."""

    async def load_module(self, target: str, relative_to: Path) -> ModuleType:
        return await asyncio.to_thread(self._load, target, Path(relative_to))

    def _load(self, target: str, relative_to: Path) -> ModuleType:
        path = (relative_to / target).resolve()
        if path.is_file():
            return self._load_file(path)

        # `file: package.module` names an importable module instead of a file
        if target.replace(".", "").replace("_", "").isalnum():
            try:
                return importlib.import_module(target)
            except ImportError as e:
                raise ModuleLoadError(target, str(e)) from e

        raise ModuleLoadError(path, "file does not exist")

    @staticmethod
    def _load_file(path: Path) -> ModuleType:
        digest = hashlib.sha256(str(path).encode()).hexdigest()[:12]
        module_name = f"{MODULE_PREFIX}{path.stem.replace('.', '_')}_{digest}"

        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ModuleLoadError(path, "not an importable Python file")

        module = importlib.util.module_from_spec(spec)
        # Registered before exec so dataclasses and pickling can find it
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            raise ModuleLoadError(path, f"{type(e).__name__}: {e}") from e

        logger.debug(f"Imported {path} as {module_name}")
        return module
