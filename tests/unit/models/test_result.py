"""Tests for result models."""

from dataclasses import FrozenInstanceError

import pytest

from autotest_harness.models.result import HarnessSummary, TestFileResult
from autotest_harness.testing.factories import TestResultFactory


def _file_result(*statuses: str, skipped: int = 0) -> TestFileResult:
    return TestFileResult(
        file="test-a.ts",
        tests=[TestResultFactory.build(status=status) for status in statuses],
        duration_ms=100,
        skipped=skipped,
    )


class TestTestFileResult:
    """Tests for TestFileResult counts."""

    def test_counts_statuses(self) -> None:
        """Derives counts from the synthesized results."""
        result = _file_result("pass", "pass", "fail", "timeout", "crash", "crash")

        assert result.passed == 2
        assert result.failed == 1
        assert result.timeout == 1
        assert result.crashed == 2

    def test_skipped_is_independent_of_tests(self) -> None:
        """Skipped may exceed the number of results."""
        result = _file_result("pass", skipped=3)

        assert result.passed == 1
        assert result.skipped == 3

    def test_is_immutable(self) -> None:
        """Results cannot be modified after synthesis."""
        result = _file_result("pass")

        with pytest.raises(FrozenInstanceError):
            result.skipped = 5  # type: ignore[misc]


class TestHarnessSummary:
    """Tests for HarnessSummary totals."""

    def test_sums_across_files(self) -> None:
        """Totals add up the per-file counts."""
        summary = HarnessSummary(
            files=[
                _file_result("pass", "fail", skipped=1),
                _file_result("pass", "timeout"),
            ],
            total_duration_ms=1000,
        )

        assert summary.total_passed == 2
        assert summary.total_failed == 1
        assert summary.total_timeout == 1
        assert summary.total_crashed == 0
        assert summary.total_skipped == 1

    def test_exit_code_crash_wins(self) -> None:
        """Exit code follows crash > timeout > fail precedence."""
        summary = HarnessSummary(
            files=[
                _file_result("crash"),
                _file_result("timeout"),
                _file_result("fail", "fail", "fail"),
            ],
            total_duration_ms=1000,
        )

        assert summary.exit_code == 4

    def test_exit_code_all_passed(self) -> None:
        """Exit code is 0 when everything passed."""
        summary = HarnessSummary(
            files=[_file_result("pass", skipped=1)], total_duration_ms=10
        )

        assert summary.exit_code == 0
