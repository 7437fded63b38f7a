"""Module loader adapters."""

from .python_module import PythonModuleLoader

__all__ = ["PythonModuleLoader"]
