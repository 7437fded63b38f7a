"""Per-source pipeline: load, normalize, import, bind and execute.

This module implements the driving RunPort. For every document source
it runs the resolution pipeline (include resolution, normalization,
module import, export binding) and then hands the bound suites to the
ExecutionDriver. A resolution failure aborts that source only; the
remaining sources still run.
"""

import logging
from pathlib import Path
from types import ModuleType

from .driver import ExecutionDriver
from .errors import CasefileError, InvalidDocumentError
from .models import CaseResult, RunSummary, TestConfig
from .normalizer import DocumentNormalizer
from .ports import (
    DiscoveryPort,
    DocumentSourcePort,
    ModuleLoaderPort,
    ReporterPort,
    RunPort,
)

logger = logging.getLogger(__name__)


class RunService(RunPort):
    """Implements the source-by-source run.

    Sources and the cases inside them run strictly in order; the two
    awaited steps (reading a source and importing its module) are never
    overlapped.
    """

    def __init__(
        self,
        source: DocumentSourcePort,
        loader: ModuleLoaderPort,
        discovery: DiscoveryPort,
        reporter: ReporterPort,
        driver: ExecutionDriver | None = None,
        normalizer: DocumentNormalizer | None = None,
    ):
        self.source = source
        self.loader = loader
        self.discovery = discovery
        self.reporter = reporter
        self.driver = driver or ExecutionDriver()
        self.normalizer = normalizer or DocumentNormalizer()

    async def resolve(self, path: Path) -> TestConfig:
        """Load and normalize one source without importing anything.

        Raises:
            CasefileError: If includes or documents are invalid.
        """
        documents = await self.source.load_documents(path)
        config = self.normalizer.normalize(documents, source=str(path))
        if config.file_path is None:
            raise InvalidDocumentError("no header document with a 'file' key", path)
        return config

    async def prepare(self, path: Path) -> tuple[TestConfig, ModuleType]:
        config = await self.resolve(path)
        module = await self._import_target(config, path)
        return config, module

    async def run_source(self, path: Path) -> list[CaseResult]:
        """Run one source and report its cases.

        Raises:
            CasefileError: On any resolution-time failure.
        """
        config = await self.resolve(path)
        if config.skip:
            logger.info(f"Skipping {path} (header sets skip)")
            return []
        return await self._execute(config, path)

    async def _import_target(self, config: TestConfig, path: Path) -> ModuleType:
        return await self.loader.load_module(config.file_path or "", Path(path).parent)

    async def _execute(self, config: TestConfig, path: Path) -> list[CaseResult]:
        module = await self._import_target(config, path)
        bound = self.driver.bind_targets(config, module)
        return self.driver.run(config, bound, self.reporter)

    async def run_path(self, path: Path) -> RunSummary:
        sources = self.discovery.discover(Path(path))
        logger.info(f"Running {len(sources)} source(s) from {path}")

        sources_failed = 0
        passed = 0
        failed = 0
        skipped = 0

        for source_path in sources:
            try:
                config = await self.resolve(source_path)
                if config.skip:
                    skipped += config.case_count
                    logger.info(f"Skipping {source_path} (header sets skip)")
                    continue
                results = await self._execute(config, source_path)
            except (CasefileError, OSError) as e:
                sources_failed += 1
                logger.error(f"Failed to resolve {source_path}: {e}")
                self.reporter.report_source_error(source_path, e)
                if self.driver.fail_fast:
                    break
                continue

            passed += sum(1 for result in results if result.passed)
            failed += sum(1 for result in results if not result.passed)
            if self.driver.fail_fast and failed:
                break

        summary = RunSummary(
            sources=len(sources),
            sources_failed=sources_failed,
            cases_passed=passed,
            cases_failed=failed,
            cases_skipped=skipped,
        )
        self.reporter.report_summary(summary)
        return summary
