"""Composition root for the casefile test runner.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Command selection (run, list)
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from casefile.adapters.cli.commands import CLICommandHandler
from casefile.adapters.discovery.filesystem import FilesystemDiscovery
from casefile.adapters.loader.python_module import PythonModuleLoader
from casefile.adapters.reporting.stdout import StdoutReporter
from casefile.adapters.source.yaml_source import YamlDocumentSource
from casefile.config import Settings, load_settings
from casefile.core.driver import ExecutionDriver
from casefile.core.ports import ReporterPort
from casefile.core.runner import RunService


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so they never interleave with the report on stdout
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_runner(settings: Settings, reporter: ReporterPort | None = None) -> RunService:
    """Wire adapters and core services into a RunService."""
    return RunService(
        source=YamlDocumentSource(encoding=settings.encoding),
        loader=PythonModuleLoader(),
        discovery=FilesystemDiscovery(settings.suffixes),
        reporter=reporter or StdoutReporter(verbose=settings.verbose),
        driver=ExecutionDriver(fail_fast=settings.fail_fast),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="casefile",
        description="Run unit tests described in YAML document sources.",
    )
    parser.add_argument("--env-file", help="Path to a .env file with CASEFILE_* settings")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override CASEFILE_LOG_LEVEL",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run every discovered source")
    run_parser.add_argument("path", nargs="?", help="Directory or source file (default: test_root)")
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Report passing cases too")
    run_parser.add_argument("-x", "--fail-fast", action="store_true", help="Stop at the first failure")

    list_parser = subparsers.add_parser("list", help="List sources, suites and cases")
    list_parser.add_argument("path", nargs="?", help="Directory or source file (default: test_root)")
    list_parser.add_argument("--json", action="store_true", help="Print JSON instead of text")

    return parser


async def _dispatch(args: argparse.Namespace, settings: Settings) -> int:
    path = args.path or settings.test_root
    handler = CLICommandHandler(build_runner(settings))

    if args.command == "run":
        result = await handler.run(path)
        return 0 if result["status"] == "success" else 1

    if args.command == "list":
        result = await handler.list_sources(path)
        if args.json:
            print(json.dumps(result, indent=2, default=str))
        else:
            _print_listing(result)
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def _print_listing(result: dict[str, Any]) -> None:
    """Print a human-readable source listing."""
    for source in result["sources"]:
        print(source["path"])
        if "error" in source:
            print(f"  ERROR: {source['error']}")
            continue
        skipped = " (skipped)" if source["skip"] else ""
        print(f"  {source['group']} -> {source['target']}{skipped}")
        for suite in source["suites"]:
            print(f"    {suite['name']} [{suite['mode']}] export={suite['export']}")
            for case in suite["cases"]:
                print(f"      - {case}")


def main(argv: list[str] | None = None) -> int:
    """Application entry point.

    Exit codes:
        0: Every case passed (or listing succeeded)
        1: A case failed or a source could not be resolved
        2: Invalid command line or configuration
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.env_file)
    except Exception as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    updates: dict[str, Any] = {}
    if args.log_level:
        updates["log_level"] = args.log_level
    if getattr(args, "verbose", False):
        updates["verbose"] = True
    if getattr(args, "fail_fast", False):
        updates["fail_fast"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    try:
        return asyncio.run(_dispatch(args, settings))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (SIGINT)")
        return 130
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
