"""Tests for test file discovery."""

import logging
from pathlib import Path

import pytest

from autotest_harness.discovery import find_test_files


@pytest.fixture
def tests_dir(tmp_path: Path) -> Path:
    """Create a tests directory with a mix of files."""
    directory = tmp_path / "tests" / "autonomous"
    directory.mkdir(parents=True)
    for name in ("test-b.ts", "test-a.ts", "helper.ts", "test-c.js", "README.md"):
        (directory / name).write_text("// test\n")
    (directory / "test-dir.ts").mkdir()
    return directory


class TestDefaultDiscovery:
    """Tests for discovery without patterns."""

    def test_finds_test_files_sorted(self, tmp_path: Path, tests_dir: Path) -> None:
        """Finds test-*.ts files in the tests directory."""
        files = find_test_files([], project_root=tmp_path, tests_dir=tests_dir)

        assert [f.name for f in files] == ["test-a.ts", "test-b.ts"]

    def test_missing_tests_dir(self, tmp_path: Path) -> None:
        """Returns no files when the tests directory does not exist."""
        files = find_test_files(
            [], project_root=tmp_path, tests_dir=tmp_path / "missing"
        )

        assert files == []


class TestPatternDiscovery:
    """Tests for discovery from command-line patterns."""

    def test_expands_wildcards(self, tmp_path: Path, tests_dir: Path) -> None:
        """Expands wildcards relative to the project root, keeping .ts files."""
        files = find_test_files(
            ["tests/autonomous/*"], project_root=tmp_path, tests_dir=tests_dir
        )

        assert [f.name for f in files] == ["helper.ts", "test-a.ts", "test-b.ts"]

    def test_direct_paths(self, tmp_path: Path, tests_dir: Path) -> None:
        """Resolves direct paths relative to the project root."""
        files = find_test_files(
            ["tests/autonomous/test-b.ts", str(tests_dir / "test-a.ts")],
            project_root=tmp_path,
            tests_dir=tests_dir,
        )

        assert files == [tests_dir / "test-a.ts", tests_dir / "test-b.ts"]

    def test_warns_about_missing_file(
        self,
        tmp_path: Path,
        tests_dir: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Skips missing files with a warning."""
        with caplog.at_level(logging.WARNING):
            files = find_test_files(
                ["tests/autonomous/test-zzz.ts"],
                project_root=tmp_path,
                tests_dir=tests_dir,
            )

        assert files == []
        assert "Test file not found" in caplog.text

    def test_wildcard_in_missing_directory(
        self, tmp_path: Path, tests_dir: Path
    ) -> None:
        """Returns no files for a wildcard in a missing directory."""
        files = find_test_files(
            ["nowhere/*.ts"], project_root=tmp_path, tests_dir=tests_dir
        )

        assert files == []
