"""Supervise one run of the program under test."""

import asyncio
import logging
import os
import signal
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from autotest_harness.capture import drain_stream
from autotest_harness.config import HarnessConfig
from autotest_harness.crash import normalize_exit_code
from autotest_harness.errors import HarnessSetupError

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ProcessOutcome:
    """How a supervised process ended and what it wrote."""

    exit_code: int | None
    timed_out: bool
    stdout: str
    stderr: str


@dataclass(frozen=True, kw_only=True)
class ProcessSupervisor:
    """Runs the program under test against a single test file.

    Output draining, the exit wait and the timeout timer all progress
    concurrently, and the outcome is only produced once the process has exited
    and both pipes have closed.
    """

    config: HarnessConfig

    async def run(self, test_path: Path) -> ProcessOutcome:
        """Spawn the program for ``test_path`` and wait for it to finish.

        If the run is cancelled, the program and anything it started are
        killed before the cancellation propagates.

        Raises:
            HarnessSetupError: If the program cannot be spawned at all

        """
        process = await self._spawn(test_path)

        try:
            async with asyncio.TaskGroup() as tg:
                stdout_task = tg.create_task(
                    drain_stream(
                        process.stdout,  # type: ignore[arg-type]
                        name="stdout",
                    )
                )
                stderr_task = tg.create_task(
                    drain_stream(
                        process.stderr,  # type: ignore[arg-type]
                        name="stderr",
                        mirror=sys.stderr if self.config.verbose else None,
                    )
                )
                exit_task = tg.create_task(self._wait_for_exit(process))
        except BaseException:
            log.debug("Run aborted, killing process group %s", process.pid)
            kill_process_group(process)
            await process.wait()
            raise

        timed_out = exit_task.result()
        exit_code = normalize_exit_code(process.returncode)
        stdout = stdout_task.result()
        stderr = stderr_task.result()

        log.debug("Exit code: %s", exit_code)
        log.debug("Stdout length: %d chars", len(stdout))
        log.debug("Stderr length: %d chars", len(stderr))

        return ProcessOutcome(
            exit_code=exit_code,
            timed_out=timed_out,
            stdout=stdout,
            stderr=stderr,
        )

    async def _spawn(self, test_path: Path) -> asyncio.subprocess.Process:
        binary = self.config.binary_path
        kwargs: dict[str, Any] = {}
        if sys.platform != "win32":
            # Own process group, so helpers inheriting the pipes can be killed too
            kwargs["start_new_session"] = True
        try:
            return await asyncio.create_subprocess_exec(
                binary,
                test_path,
                cwd=self.config.project_root,
                env={**os.environ, **self.config.child_env()},
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **kwargs,
            )
        except OSError as e:
            raise HarnessSetupError(f"Failed to spawn {binary}: {e}") from e

    async def _wait_for_exit(self, process: asyncio.subprocess.Process) -> bool:
        """Wait for the process and its pipes, killing them once the timeout expires.

        ``process.wait()`` only completes after every pipe has closed, so a
        helper that inherited stdout or stderr can outlive the process itself.
        The timeout is recorded only if the process had not exited yet.

        Returns:
            True if the timeout fired before the process exited

        """
        try:
            async with asyncio.timeout(self.config.timeout_seconds):
                await process.wait()
            return False
        except TimeoutError:
            timed_out = process.returncode is None
            if timed_out:
                log.debug("Timeout reached, killing process group %s...", process.pid)
            else:
                log.debug(
                    "Process %s exited but its pipes are still open, "
                    "killing process group...",
                    process.pid,
                )
            kill_process_group(process)
            await process.wait()
            return timed_out


def kill_process_group(process: asyncio.subprocess.Process) -> None:
    """Send SIGKILL to the process group led by ``process``.

    The group outlives its leader while helpers remain in it. A group with no
    members left is not an error.
    """
    try:
        if sys.platform == "win32":
            process.kill()
        else:
            os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        log.debug("Process group %s already exited", process.pid)
