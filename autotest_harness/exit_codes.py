"""Process exit codes reported by the harness."""

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_SETUP_ERROR = 2
EXIT_TIMEOUT = 3
EXIT_CRASH = 4


def determine_exit_code(*, crashed: int, timeout: int, failed: int) -> int:
    """Map aggregate counts to a single exit status.

    Severity order is crash, then timeout, then failure.
    """
    if crashed > 0:
        return EXIT_CRASH
    if timeout > 0:
        return EXIT_TIMEOUT
    if failed > 0:
        return EXIT_FAILED
    return EXIT_OK
