"""pytest integration: collect YAML document sources as test items.

Every file whose name ends with a recognized suffix becomes a pytest
file node; every case in it becomes one item named
``<suite> > <case>``. Resolution-time errors (includes, documents,
module import, export lookup) surface as a collection error of that
file; execution-time failures fail only their own item.

Enable with ``-p casefile.pytest_plugin`` or through the installed
``pytest11`` entry point.
"""

import asyncio
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from casefile.adapters.discovery.filesystem import DEFAULT_SUFFIXES, FilesystemDiscovery
from casefile.config import load_settings
from casefile.core.driver import ExecutionDriver
from casefile.core.errors import CaseFailure
from casefile.core.models import Case, Suite, TestConfig
from casefile.main import build_runner

logger = logging.getLogger(__name__)

SUFFIXES_INI = "casefile_suffixes"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini(
        SUFFIXES_INI,
        type="linelist",
        help="Filename suffixes collected as casefile document sources",
        default=list(DEFAULT_SUFFIXES),
    )


def pytest_collect_file(file_path: Path, parent: pytest.Collector) -> "CasefileSource | None":
    suffixes = tuple(parent.config.getini(SUFFIXES_INI) or DEFAULT_SUFFIXES)
    if FilesystemDiscovery(suffixes).matches(file_path):
        return CasefileSource.from_parent(parent, path=file_path)
    return None


class CasefileSource(pytest.File):
    """One document source."""

    def collect(self) -> Iterator["CasefileCase"]:
        driver = ExecutionDriver()
        config, bound = asyncio.run(self._resolve(driver))

        for suite, target in bound:
            for case in suite.cases:
                item = CasefileCase.from_parent(
                    self,
                    name=f"{suite.name} > {case.name}",
                    test_config=config,
                    suite=suite,
                    case=case,
                    target=target,
                    driver=driver,
                )
                if config.skip:
                    item.add_marker(pytest.mark.skip(reason="source header sets skip"))
                yield item

    async def _resolve(self, driver: ExecutionDriver) -> tuple[TestConfig, list[Any]]:
        runner = build_runner(load_settings())
        config, module = await runner.prepare(self.path)
        bound = driver.bind_targets(config, module)
        logger.debug(f"Collected {config.case_count} case(s) from {self.path}")
        return config, bound


class CasefileCase(pytest.Item):
    """One case of a document source."""

    def __init__(
        self,
        *,
        test_config: TestConfig,
        suite: Suite,
        case: Case,
        target: Any,
        driver: ExecutionDriver,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.test_config = test_config
        self.suite = suite
        self.case = case
        self.target = target
        self.driver = driver

    def runtest(self) -> None:
        result = self.driver.run_case(self.test_config, self.suite, self.case, self.target)
        if not result.passed:
            raise CaseFailure(result.message)

    def repr_failure(self, excinfo: pytest.ExceptionInfo[BaseException], style: Any = None) -> str:
        if isinstance(excinfo.value, CaseFailure):
            return f"{self.test_config.display_name} > {self.name}\n{excinfo.value}"
        return str(super().repr_failure(excinfo))

    def reportinfo(self) -> tuple[Path, int | None, str]:
        return self.path, None, f"casefile: {self.name}"
