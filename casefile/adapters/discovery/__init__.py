"""Discovery adapters."""

from .filesystem import DEFAULT_SUFFIXES, FilesystemDiscovery

__all__ = ["DEFAULT_SUFFIXES", "FilesystemDiscovery"]
