"""Configuration for the test harness."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_AUTO_SUBMIT_DELAY_MS = 100
DEFAULT_BINARY = Path("target") / "debug" / "script-kit-gpui"
DEFAULT_TESTS_DIR = Path("tests") / "autonomous"


class HarnessConfig(BaseModel):
    """Settings resolved once at startup and passed to every component."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    binary_path: Path
    tests_dir: Path
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    auto_submit_delay_ms: int = Field(default=DEFAULT_AUTO_SUBMIT_DELAY_MS, ge=0)
    headless: bool = False
    # Forwarded to the program under test as RUST_LOG
    log_level: str = "info"
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str],
        *,
        project_root: Path | None = None,
        verbose: bool = False,
    ) -> "HarnessConfig":
        """Build configuration from environment overrides.

        Recognized variables: TEST_TIMEOUT_MS, AUTO_SUBMIT_DELAY_MS,
        BINARY_PATH, HEADLESS, RUST_LOG and SDK_TEST_VERBOSE.
        """
        root = (project_root or Path.cwd()).resolve()
        values: dict[str, Any] = {
            "project_root": root,
            "binary_path": root / (environ.get("BINARY_PATH") or DEFAULT_BINARY),
            "tests_dir": root / DEFAULT_TESTS_DIR,
            "headless": environ.get("HEADLESS") == "true",
            "verbose": verbose or environ.get("SDK_TEST_VERBOSE") == "true",
        }
        if timeout := environ.get("TEST_TIMEOUT_MS"):
            values["timeout_ms"] = timeout
        if delay := environ.get("AUTO_SUBMIT_DELAY_MS"):
            values["auto_submit_delay_ms"] = delay
        if log_level := environ.get("RUST_LOG"):
            values["log_level"] = log_level
        return cls.model_validate(values)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def child_env(self) -> dict[str, str]:
        """Environment that puts the program under test in non-interactive mode."""
        return {
            "AUTO_SUBMIT": "true",
            "AUTO_SUBMIT_DELAY_MS": str(self.auto_submit_delay_ms),
            "TEST_TIMEOUT_MS": str(self.timeout_ms),
            "HEADLESS": "true" if self.headless else "false",
            "RUST_LOG": self.log_level,
        }
