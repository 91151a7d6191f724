"""Turn a supervised process outcome into per-test verdicts."""

import logging
from collections.abc import Mapping

from autotest_harness.config import HarnessConfig
from autotest_harness.crash import detect_crash
from autotest_harness.events import aggregate_events, parse_events
from autotest_harness.models.event import RawEvent
from autotest_harness.models.result import ResultStatus, TestFileResult, TestResult
from autotest_harness.supervisor import ProcessOutcome

log = logging.getLogger(__name__)


def synthesize_file_result(
    file_name: str,
    outcome: ProcessOutcome,
    duration_ms: int,
    config: HarnessConfig,
) -> TestFileResult:
    """Combine parsed events, crash classification and timeout into a file result.

    A timeout overrides every test verdict, then a crash does, then each test's
    own reported status applies. When the process produced no events at all, a
    single result named after the file is synthesized so the file is always
    reported.

    Args:
        file_name: Base name of the test file
        outcome: Supervised process outcome
        duration_ms: Wall-clock duration of the whole file run
        config: Harness configuration

    Returns:
        Result for the file, with ``skipped`` counted from raw skip events

    """
    events = parse_events(outcome.stdout)
    aggregated = aggregate_events(events)
    crash_reason = detect_crash(outcome.stderr, outcome.exit_code)

    log.debug("Parsed %d events, %d unique tests", len(events), len(aggregated))

    if aggregated:
        tests = _results_from_events(
            aggregated, outcome, crash_reason, duration_ms, config
        )
    else:
        tests = [
            _fallback_result(file_name, outcome, crash_reason, duration_ms, config)
        ]

    return TestFileResult(
        file=file_name,
        tests=tests,
        duration_ms=duration_ms,
        skipped=sum(1 for event in events if event.status == "skip"),
    )


def _results_from_events(
    aggregated: Mapping[str, RawEvent],
    outcome: ProcessOutcome,
    crash_reason: str | None,
    duration_ms: int,
    config: HarnessConfig,
) -> list[TestResult]:
    results: list[TestResult] = []

    for test_name, event in aggregated.items():
        status: ResultStatus
        error: str | None

        if outcome.timed_out:
            status = "timeout"
            error = f"Test timed out after {config.timeout_ms}ms"
        elif crash_reason:
            status = "crash"
            error = crash_reason
        elif event.status == "pass":
            status = "pass"
            error = None
        elif event.status == "skip":
            # Reported as a pass; the skip itself is tallied separately
            status = "pass"
            error = event.reason or "Skipped"
        else:
            status = "fail"
            error = event.error

        results.append(
            TestResult(
                test=test_name,
                status=status,
                # A missing or zero duration falls back to the file duration
                duration_ms=event.duration_ms or duration_ms,
                error=error,
                stdout=outcome.stdout if config.verbose else None,
                stderr=outcome.stderr if config.verbose else None,
            )
        )

    return results


def _fallback_result(
    file_name: str,
    outcome: ProcessOutcome,
    crash_reason: str | None,
    duration_ms: int,
    config: HarnessConfig,
) -> TestResult:
    status: ResultStatus
    if outcome.timed_out:
        status = "timeout"
        error = f"Test file timed out after {config.timeout_ms}ms"
    elif crash_reason:
        status = "crash"
        error = crash_reason
    elif outcome.exit_code == 0:
        status = "pass"
        error = "No JSONL output but exit code 0"
    else:
        status = "fail"
        error = f"No test results parsed. Exit code: {outcome.exit_code}"

    return TestResult(
        test=file_name,
        status=status,
        duration_ms=duration_ms,
        error=error,
        stdout=outcome.stdout if config.verbose else None,
        stderr=outcome.stderr if config.verbose or status != "pass" else None,
    )
