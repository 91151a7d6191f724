"""Select the test files to run."""

import logging
from collections.abc import Sequence
from pathlib import Path

log = logging.getLogger(__name__)

TEST_SUFFIX = ".ts"
DEFAULT_TEST_GLOB = "test-*.ts"


def find_test_files(
    patterns: Sequence[str],
    *,
    project_root: Path,
    tests_dir: Path,
) -> Sequence[Path]:
    """Resolve command-line patterns into a sorted list of test files.

    Args:
        patterns: Paths or ``*`` wildcard patterns, relative to project_root
        project_root: Directory relative paths are resolved against
        tests_dir: Directory searched for ``test-*.ts`` when no patterns are given

    Returns:
        Sorted test file paths

    """
    if not patterns:
        return find_default_test_files(tests_dir)

    files: list[Path] = []
    for pattern in patterns:
        if "*" in pattern:
            files.extend(expand_pattern(project_root, pattern))
            continue

        resolved = project_root / pattern
        if resolved.exists():
            files.append(resolved)
        else:
            log.warning("Test file not found: %s", resolved)

    return sorted(files)


def expand_pattern(project_root: Path, pattern: str) -> Sequence[Path]:
    """Expand a wildcard in the last path component of ``pattern``."""
    relative = Path(pattern)
    directory = project_root / relative.parent
    if not directory.is_dir():
        log.debug("Could not read directory: %s", relative.parent)
        return []

    return [
        entry
        for entry in directory.glob(relative.name)
        if entry.is_file() and entry.suffix == TEST_SUFFIX
    ]


def find_default_test_files(tests_dir: Path) -> Sequence[Path]:
    """Find every ``test-*.ts`` file directly inside ``tests_dir``."""
    if not tests_dir.is_dir():
        log.info("Tests directory not found: %s", tests_dir)
        return []

    return sorted(
        entry for entry in tests_dir.glob(DEFAULT_TEST_GLOB) if entry.is_file()
    )
