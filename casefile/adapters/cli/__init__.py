"""CLI adapter for casefile commands."""

from .commands import CLICommandHandler

__all__ = ["CLICommandHandler"]
