"""Classify abnormal termination of the program under test."""

import re
from collections.abc import Mapping, Sequence

# Shell convention: a process killed by signal N exits with 128 + N
EXIT_CODE_CAUSES: Mapping[int, str] = {
    139: "SIGSEGV (segmentation fault)",
    134: "SIGABRT (abort)",
    138: "SIGBUS (bus error)",
    137: "SIGKILL (killed)",
}

CRASH_PATTERNS: Sequence[re.Pattern[str]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"panic",
        r"SIGSEGV",
        r"SIGBUS",
        r"SIGABRT",
        r"assertion failed",
        r"segmentation fault",
        r"bus error",
        r"abort trap",
        r"fatal error",
        r"thread.*panicked",
    )
)


def normalize_exit_code(returncode: int | None) -> int | None:
    """Convert a negative "killed by signal" return code to 128 + signal.

    >>> normalize_exit_code(-11)
    139
    """
    if returncode is not None and returncode < 0:
        return 128 - returncode
    return returncode


def detect_crash(stderr: str, exit_code: int | None) -> str | None:
    """Return a human-readable crash cause, or None if the process exited cleanly.

    Args:
        stderr: Full standard-error text captured from the process
        exit_code: Exit code in shell convention, None if unknown

    Returns:
        Crash cause, checked by exit code first, then by stderr markers, then
        by any remaining nonzero exit code.

    """
    if exit_code in EXIT_CODE_CAUSES:
        return EXIT_CODE_CAUSES[exit_code]

    for pattern in CRASH_PATTERNS:
        if match := pattern.search(stderr):
            return f"Crash detected: {match.group(0)}"

    if exit_code is not None and exit_code != 0:
        return f"Process exited with code {exit_code}"

    return None
