"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from autotest_harness.exit_codes import determine_exit_code

ResultStatus = Literal["pass", "fail", "timeout", "crash"]


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Final verdict for one named test.

    Timeout and crash are never reported by the program under test; the harness
    injects them when classifying how the process ended.
    """

    __test__ = False

    test: str
    status: ResultStatus
    duration_ms: int | float
    error: str | None = None
    stdout: str | None = None
    stderr: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestFileResult:
    """Outcome of running one test file in its own subprocess.

    ``skipped`` counts raw ``skip`` events, while the other tallies count
    synthesized results. A skipped test therefore counts toward both ``passed``
    and ``skipped``.
    """

    __test__ = False

    file: str
    tests: Sequence[TestResult]
    duration_ms: int
    skipped: int = 0

    def _count(self, status: ResultStatus) -> int:
        return sum(1 for result in self.tests if result.status == status)

    @property
    def passed(self) -> int:
        return self._count("pass")

    @property
    def failed(self) -> int:
        return self._count("fail")

    @property
    def timeout(self) -> int:
        return self._count("timeout")

    @property
    def crashed(self) -> int:
        return self._count("crash")


@dataclass(frozen=True, kw_only=True)
class HarnessSummary:
    """Totals across every test file of one harness run."""

    files: Sequence[TestFileResult]
    total_duration_ms: int

    @property
    def total_passed(self) -> int:
        return sum(f.passed for f in self.files)

    @property
    def total_failed(self) -> int:
        return sum(f.failed for f in self.files)

    @property
    def total_timeout(self) -> int:
        return sum(f.timeout for f in self.files)

    @property
    def total_crashed(self) -> int:
        return sum(f.crashed for f in self.files)

    @property
    def total_skipped(self) -> int:
        return sum(f.skipped for f in self.files)

    @property
    def exit_code(self) -> int:
        return determine_exit_code(
            crashed=self.total_crashed,
            timeout=self.total_timeout,
            failed=self.total_failed,
        )
