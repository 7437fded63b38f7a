"""Tests for dynamic import of the module under test."""

import json
import sys
from pathlib import Path

import pytest

from casefile.adapters.loader.python_module import MODULE_PREFIX, PythonModuleLoader
from casefile.core.errors import ModuleLoadError


@pytest.fixture
def loader() -> PythonModuleLoader:
    return PythonModuleLoader()


class TestPythonModuleLoader:
    """Test PythonModuleLoader."""

    @pytest.mark.asyncio
    async def test_loads_file_relative_to_source_dir(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "math_utils.py").write_text("def add(a, b):\n    return a + b\n")

        module = await loader.load_module("../src/math_utils.py", tmp_path / "tests")

        assert module.add(2, 3) == 5
        assert module.__name__.startswith(MODULE_PREFIX + "math_utils_")
        assert sys.modules[module.__name__] is module

    @pytest.mark.asyncio
    async def test_same_basename_in_different_dirs(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        for name, value in [("one", 1), ("two", 2)]:
            (tmp_path / name).mkdir()
            (tmp_path / name / "target.py").write_text(f"VALUE = {value}\n")

        first = await loader.load_module("one/target.py", tmp_path)
        second = await loader.load_module("two/target.py", tmp_path)

        assert first.__name__ != second.__name__
        assert (first.VALUE, second.VALUE) == (1, 2)

    @pytest.mark.asyncio
    async def test_dotted_module_name(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        module = await loader.load_module("json", tmp_path)
        assert module is json

    @pytest.mark.asyncio
    async def test_unknown_dotted_module(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        with pytest.raises(ModuleLoadError):
            await loader.load_module("no_such_package.anywhere", tmp_path)

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        with pytest.raises(ModuleLoadError, match="file does not exist"):
            await loader.load_module("./missing.py", tmp_path)

    @pytest.mark.asyncio
    async def test_module_raising_on_import(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        (tmp_path / "broken.py").write_text("raise RuntimeError('cannot import me')\n")

        with pytest.raises(ModuleLoadError, match="RuntimeError: cannot import me"):
            await loader.load_module("./broken.py", tmp_path)

        assert not [name for name in sys.modules if name.startswith(MODULE_PREFIX + "broken_")]

    @pytest.mark.asyncio
    async def test_syntax_error(self, tmp_path: Path, loader: PythonModuleLoader) -> None:
        (tmp_path / "syntax.py").write_text("def oops(:\n")

        with pytest.raises(ModuleLoadError, match="SyntaxError"):
            await loader.load_module("./syntax.py", tmp_path)
