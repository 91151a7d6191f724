"""Errors that abort a whole harness run."""


class HarnessSetupError(Exception):
    """Raised when the program under test cannot be located or spawned."""
