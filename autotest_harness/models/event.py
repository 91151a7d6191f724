"""Models for test events emitted by the program under test."""

from typing import Any, Literal

from pydantic import Field

from autotest_harness.models.base import Model

EventStatus = Literal["running", "pass", "fail", "skip"]


class RawEvent(Model):
    """Single JSONL record reporting the progress of one named test."""

    test: str = Field(..., min_length=1, description="Name of the reporting test")
    status: EventStatus = Field(..., description="Reported test state")
    timestamp: str = Field(default="", description="ISO timestamp of the report")
    duration_ms: int | float | None = Field(
        default=None, description="Duration measured by the test itself"
    )
    error: str | None = Field(default=None, description="Failure message")
    reason: str | None = Field(default=None, description="Skip reason")
    result: Any = Field(default=None, description="Opaque test payload")

    @property
    def is_terminal(self) -> bool:
        """Whether this event reports a final state rather than progress."""
        return self.status != "running"
