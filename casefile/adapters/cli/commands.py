"""CLI command implementations for casefile.

Maps CLI commands (run, list) onto the RunService. Each handler returns a
plain dictionary so the entry point can print it as text or JSON.
"""

import logging
from pathlib import Path
from typing import Any

from casefile.core.errors import CasefileError
from casefile.core.runner import RunService

logger = logging.getLogger(__name__)


class CLICommandHandler:
    """Handles CLI commands by delegating to RunService."""

    def __init__(self, runner: RunService):
        """Initialize the CLI command handler.

        Args:
            runner: RunService used to resolve and run document sources.
        """
        self.runner = runner

    async def run(self, path: str) -> dict[str, Any]:
        """Run every source below `path`.

        Returns:
            Dictionary with status and run totals.
        """
        summary = await self.runner.run_path(Path(path))
        return {
            "status": "success" if summary.ok else "failure",
            "operation": "run",
            "path": path,
            "sources": summary.sources,
            "sources_failed": summary.sources_failed,
            "passed": summary.cases_passed,
            "failed": summary.cases_failed,
            "skipped": summary.cases_skipped,
        }

    async def list_sources(self, path: str) -> dict[str, Any]:
        """Describe the sources below `path` without executing anything.

        Sources that fail to resolve are listed with their error message.
        """
        sources: list[dict[str, Any]] = []
        for source_path in self.runner.discovery.discover(Path(path)):
            try:
                config = await self.runner.resolve(source_path)
            except (CasefileError, OSError) as e:
                logger.error(f"Failed to resolve {source_path}: {e}")
                sources.append({"path": str(source_path), "error": str(e)})
                continue

            sources.append(
                {
                    "path": str(source_path),
                    "target": config.file_path,
                    "group": config.display_name,
                    "skip": config.skip,
                    "suites": [
                        {
                            "name": suite.name,
                            "export": suite.export_name,
                            "mode": suite.mode,
                            "cases": [case.name for case in suite.cases],
                        }
                        for suite in config.selected_suites()
                    ],
                }
            )

        return {
            "status": "success",
            "operation": "list",
            "path": path,
            "sources": sources,
        }
