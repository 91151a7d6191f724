"""CLI entry point for the autonomous test harness."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from pydantic import ValidationError

from autotest_harness.config import HarnessConfig
from autotest_harness.discovery import find_test_files
from autotest_harness.errors import HarnessSetupError
from autotest_harness.exit_codes import EXIT_OK, EXIT_SETUP_ERROR
from autotest_harness.models.result import HarnessSummary, TestFileResult, TestResult
from autotest_harness.runner import HarnessRunner, verify_binary
from autotest_harness.supervisor import ProcessSupervisor


def log_configuration(log: logging.Logger, config: HarnessConfig) -> None:
    """Log the harness banner and effective configuration."""
    log.info("=" * 70)
    log.info("SCRIPT KIT AUTONOMOUS TEST HARNESS")
    log.info("=" * 70)
    log.info("Configuration:")
    log.info("  Binary:            %s", config.binary_path)
    log.info("  Timeout:           %dms", config.timeout_ms)
    log.info("  Auto-submit delay: %dms", config.auto_submit_delay_ms)
    log.info("  Headless:          %s", config.headless)
    log.info("  Verbose:           %s", config.verbose)


def log_results_summary(log: logging.Logger, summary: HarnessSummary) -> None:
    """Log the totals of a harness run."""
    log.info("=" * 70)
    log.info("RESULTS")
    log.info("=" * 70)
    log.info("  Passed:   %d", summary.total_passed)
    log.info("  Failed:   %d", summary.total_failed)
    log.info("  Timeout:  %d", summary.total_timeout)
    log.info("  Crashed:  %d", summary.total_crashed)
    log.info("  Skipped:  %d", summary.total_skipped)
    log.info("  Duration: %dms", summary.total_duration_ms)

    if summary.exit_code == EXIT_OK:
        log.info("✅ All tests passed!")
    else:
        log.info("❌ Tests failed (exit code %d)", summary.exit_code)


def format_test_result(result: TestResult) -> dict[str, Any]:
    """Format a test result for JSON output, omitting unset fields."""
    return {key: value for key, value in asdict(result).items() if value is not None}


def format_file_result(result: TestFileResult) -> dict[str, Any]:
    """Format a file result for JSON output."""
    return {
        "file": result.file,
        "tests": [format_test_result(test) for test in result.tests],
        "duration_ms": result.duration_ms,
        "passed": result.passed,
        "failed": result.failed,
        "timeout": result.timeout,
        "crashed": result.crashed,
        "skipped": result.skipped,
    }


def format_summary(summary: HarnessSummary) -> dict[str, Any]:
    """Format the run summary for JSON output."""
    return {
        "files": [format_file_result(result) for result in summary.files],
        "total_passed": summary.total_passed,
        "total_failed": summary.total_failed,
        "total_timeout": summary.total_timeout,
        "total_crashed": summary.total_crashed,
        "total_skipped": summary.total_skipped,
        "total_duration_ms": summary.total_duration_ms,
        "exit_code": summary.exit_code,
    }


def print_json_line(data: dict[str, Any]) -> None:
    print(json.dumps(data), flush=True)


async def run(
    patterns: Sequence[str],
    *,
    json_only: bool = False,
    verbose: bool = False,
) -> int:
    """Run the harness and return its exit code."""
    log = logging.getLogger("autotest_harness")

    try:
        config = HarnessConfig.from_env(os.environ, verbose=verbose)
    except ValidationError as e:
        log.error("Invalid configuration: %s", e)
        return EXIT_SETUP_ERROR

    log_configuration(log, config)

    try:
        verify_binary(config.binary_path)
    except HarnessSetupError as e:
        log.error("Error: %s", e)
        return EXIT_SETUP_ERROR

    test_files = find_test_files(
        patterns, project_root=config.project_root, tests_dir=config.tests_dir
    )

    if not test_files:
        log.info("No test files found.")
        log.info("Create tests in %s, e.g. test-core-prompts.ts", config.tests_dir)
        return EXIT_OK

    log.info("Found %d test file(s)", len(test_files))

    runner = HarnessRunner(config=config, supervisor=ProcessSupervisor(config=config))

    def print_file_result(result: TestFileResult) -> None:
        print_json_line({"type": "file_result", **format_file_result(result)})

    try:
        summary = await runner.run(
            test_files, on_result=print_file_result if json_only else None
        )
    except HarnessSetupError as e:
        log.error("Error: %s", e)
        return EXIT_SETUP_ERROR

    log_results_summary(log, summary)

    if json_only:
        print_json_line({"type": "summary", **format_summary(summary)})

    return summary.exit_code


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run autonomous tests against the program under test"
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        help="Test files or wildcard patterns (default: tests/autonomous/test-*.ts)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSONL results only",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Stream stderr in real time and log debug output",
    )

    args = parser.parse_args()

    verbose = args.verbose or os.environ.get("SDK_TEST_VERBOSE") == "true"

    if args.json:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(args.patterns, json_only=args.json, verbose=verbose)
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
