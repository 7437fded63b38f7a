"""Fake implementations of core ports for testing.

These in-memory implementations allow core logic to be tested
without touching the filesystem or the import system:

- FakeDocumentSource: Documents served from a dict keyed by path
- FakeDiscovery: Discovers exactly the fake source's paths
- FakeModuleLoader: Pre-built modules keyed by target name
- FakeReporter: Captured groups, results and summaries for assertion
"""

from .loader import FakeModuleLoader, make_module
from .reporter import FakeReporter
from .source import FakeDiscovery, FakeDocumentSource

__all__ = [
    "FakeDiscovery",
    "FakeDocumentSource",
    "FakeModuleLoader",
    "FakeReporter",
    "make_module",
]
