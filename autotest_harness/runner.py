"""Run test files one at a time and collect their results."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from autotest_harness.config import HarnessConfig
from autotest_harness.errors import HarnessSetupError
from autotest_harness.models.result import HarnessSummary, TestFileResult
from autotest_harness.supervisor import ProcessSupervisor
from autotest_harness.synthesizer import synthesize_file_result

log = logging.getLogger(__name__)

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
    "timeout": "⏱️",
    "crash": "💥",
}


def verify_binary(binary_path: Path) -> None:
    """Check that the program under test exists and is a regular file.

    Raises:
        HarnessSetupError: If the binary is missing or not a file

    """
    if not binary_path.exists():
        raise HarnessSetupError(
            f"Binary not found at {binary_path}. "
            "Run `cargo build` first to build the script-kit-gpui binary."
        )
    if not binary_path.is_file():
        raise HarnessSetupError(f"{binary_path} is not a file")
    log.debug("Binary found: %s (%d bytes)", binary_path, binary_path.stat().st_size)


def _elapsed_ms(start: float) -> int:
    return int((asyncio.get_running_loop().time() - start) * 1000)


@dataclass(frozen=True, kw_only=True)
class HarnessRunner:
    """Runs test files sequentially against the program under test."""

    config: HarnessConfig
    supervisor: ProcessSupervisor

    async def run(
        self,
        test_files: Sequence[Path],
        on_result: Callable[[TestFileResult], None] | None = None,
    ) -> HarnessSummary:
        """Run every test file in order and summarize the results.

        Args:
            test_files: Test files to run, one subprocess each
            on_result: Called with each file result as soon as it is ready

        Returns:
            Summary over all files

        Raises:
            HarnessSetupError: If the program under test cannot be spawned

        """
        start = asyncio.get_running_loop().time()
        results: list[TestFileResult] = []

        for test_file in test_files:
            result = await self.run_file(test_file)
            results.append(result)
            if on_result is not None:
                on_result(result)

        return HarnessSummary(files=results, total_duration_ms=_elapsed_ms(start))

    async def run_file(self, test_path: Path) -> TestFileResult:
        """Run a single test file and synthesize its result."""
        log.info("─" * 70)
        log.info("Running: %s", test_path)
        log.info("─" * 70)
        log.debug("Binary: %s", self.config.binary_path)
        log.debug("Timeout: %dms", self.config.timeout_ms)
        log.debug("Auto-submit delay: %dms", self.config.auto_submit_delay_ms)

        start = asyncio.get_running_loop().time()
        outcome = await self.supervisor.run(test_path)
        duration_ms = _elapsed_ms(start)

        result = synthesize_file_result(
            test_path.name, outcome, duration_ms, self.config
        )
        self._log_file_result(result)
        return result

    def _log_file_result(self, result: TestFileResult) -> None:
        for test_result in result.tests:
            symbol = STATUS_SYMBOLS.get(test_result.status, "?")
            if test_result.error:
                log.info(
                    "  %s %s (%sms) - %s",
                    symbol,
                    test_result.test,
                    test_result.duration_ms,
                    test_result.error,
                )
            else:
                log.info(
                    "  %s %s (%sms)", symbol, test_result.test, test_result.duration_ms
                )
