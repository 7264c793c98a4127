"""CLI entry point for running a test suite."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from case_runner.cleanup import CleanupRegistry
from case_runner.models.descriptor import Mode
from case_runner.models.options import (
    OptionsFileError,
    RunOptions,
    build_run_options,
    load_options_file,
)
from case_runner.report import (
    format_listing,
    format_output,
    log_results_summary,
    print_report,
    summarize,
)
from case_runner.scheduler import TestScheduler
from case_runner.selection import SelectorError, select_tests
from case_runner.suites.loading import SuiteNotFoundError, load_suite_manifest
from case_runner.suites.manifest import SuiteManifest

USAGE_ERROR = 2


async def run_suite(
    manifest: SuiteManifest,
    options: RunOptions,
    selectors: Sequence[str] = (),
    *,
    mode_filter: Mode = Mode.ALL,
    parallel: bool = False,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """Run the selected tests of a suite and return the exit code."""
    log = logging.getLogger("case_runner")

    numbers = select_tests(len(manifest.tests), selectors, manifest.names)
    tests = {number: manifest.tests[number - 1] for number in numbers}

    registry = CleanupRegistry()
    scheduler = TestScheduler(
        options=options,
        registry=registry,
        max_concurrency=manifest.max_threads if parallel else 1,
        mode_filter=mode_filter,
    )

    log.info("Running %d selected test(s) of %s", len(tests), options.prog_name)
    try:
        outcomes = await scheduler.run_tests(tests)
    finally:
        if failed := registry.drain_and_remove():
            log.warning("Could not remove %d cleanup path(s)", len(failed))

    print_report(options.prog_name, outcomes, sys.stdout, quiet=quiet)

    summary = summarize(outcomes)
    log_results_summary(log, summary)

    if json_output:
        print(json.dumps(format_output(outcomes), indent=2))

    return summary.exit_code


def build_parser(*, with_suite: bool = True) -> argparse.ArgumentParser:
    """Build the argument parser, optionally without the suite argument."""
    parser = argparse.ArgumentParser(description="Run a test suite")
    if with_suite:
        parser.add_argument(
            "suite",
            help="Suite key (e.g. selftest) or module:attribute reference",
        )
    parser.add_argument(
        "selectors",
        nargs="*",
        metavar="TEST",
        help="Test number, inclusive range N:M, or test function name",
    )
    parser.add_argument(
        "--mode",
        type=Mode,
        choices=list(Mode),
        default=Mode.ALL,
        help="Only run tests whose effective mode matches (default: ALL)",
    )
    parser.add_argument(
        "--list", action="store_true", help="List the tests and exit"
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run tests concurrently, up to the suite's thread limit",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None, help="Verbose output"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Only print problem results"
    )
    parser.add_argument(
        "--options-file",
        type=Path,
        help="YAML file with default run options",
    )
    parser.add_argument("--prog-name", help="Program name used in reports")
    parser.add_argument("--fs-type", help="Storage backend type")
    parser.add_argument("--config-file", type=Path, help="Config file path")
    parser.add_argument("--srcdir", type=Path, help="Source directory")
    parser.add_argument(
        "--repos-dir", type=Path, help="Directory for temporary repositories"
    )
    parser.add_argument("--repos-url", help="URL under which --repos-dir is reachable")
    parser.add_argument(
        "--repos-template", type=Path, help="Repository to copy for each test"
    )
    parser.add_argument(
        "--server-minor-version",
        type=int,
        help="Server minor version to test against (0 = latest)",
    )
    return parser


def options_from_args(args: argparse.Namespace, default_prog_name: str) -> RunOptions:
    """Build run options from the options file and command-line flags."""
    file_values: dict[str, Any] = {"prog_name": default_prog_name}
    if args.options_file is not None:
        file_values.update(load_options_file(args.options_file))

    return build_run_options(
        file_values,
        {
            "prog_name": args.prog_name,
            "fs_type": args.fs_type,
            "config_file": args.config_file,
            "srcdir": args.srcdir,
            "repos_dir": args.repos_dir,
            "repos_url": args.repos_url,
            "repos_template": args.repos_template,
            "server_minor_version": args.server_minor_version,
            "verbose": args.verbose,
        },
    )


def configure_logging(verbose: bool) -> None:
    """Log to stderr; calling again only changes the level."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.INFO)


def execute(
    args: argparse.Namespace,
    load_manifest: Callable[[], SuiteManifest],
    default_prog_name: str,
) -> int:
    """Run a parsed command line and return the exit code."""
    log = logging.getLogger("case_runner")
    try:
        manifest = load_manifest()
        options = options_from_args(args, default_prog_name)
        configure_logging(options.verbose)

        if args.list:
            for line in format_listing(manifest.tests, options):
                print(line)
            return 0

        return asyncio.run(
            run_suite(
                manifest,
                options,
                args.selectors,
                mode_filter=args.mode,
                parallel=args.parallel,
                quiet=args.quiet,
                json_output=args.json,
            )
        )
    except (SuiteNotFoundError, SelectorError, OptionsFileError) as e:
        log.error("%s", e)
        return USAGE_ERROR
    except ValidationError as e:
        log.error("Invalid run options: %s", e)
        return USAGE_ERROR


def run_main(manifest: SuiteManifest, argv: Sequence[str] | None = None) -> int:
    """Entry point for a suite module run as a script."""
    args = build_parser(with_suite=False).parse_args(argv)
    configure_logging(bool(args.verbose))
    return execute(args, lambda: manifest, Path(sys.argv[0]).stem or "suite")


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()
    configure_logging(bool(args.verbose))

    prog_name = args.suite.rpartition(":")[2] or args.suite
    exit_code = execute(args, lambda: load_suite_manifest(args.suite), prog_name)
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
