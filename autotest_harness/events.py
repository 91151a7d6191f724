"""Parse and aggregate JSONL test events from program output."""

import logging
from collections.abc import Iterable, Sequence

from pydantic import ValidationError

from autotest_harness.models.event import RawEvent

log = logging.getLogger(__name__)


def parse_event_line(line: str) -> RawEvent | None:
    """Decode one stdout line into a test event.

    Returns None for anything that is not a well-formed event: non-JSON
    diagnostics, JSON that is not an object, or objects missing ``test`` or
    ``status``.
    """
    try:
        return RawEvent.model_validate_json(line)
    except ValidationError:
        log.debug("Non-event stdout line: %s...", line[:100])
        return None


def parse_events(stdout: str) -> Sequence[RawEvent]:
    """Parse all test events from captured stdout, in line order."""
    events: list[RawEvent] = []
    for line in stdout.split("\n"):
        if not line.strip():
            continue
        if (event := parse_event_line(line)) is not None:
            events.append(event)
    return events


def aggregate_events(events: Iterable[RawEvent]) -> dict[str, RawEvent]:
    """Reduce events to the final state of each test.

    Test names keep first-seen order. A terminal event always replaces the
    stored one; a ``running`` event is only kept when nothing else has been
    seen for that test, so a late heartbeat never erases a verdict.
    """
    results: dict[str, RawEvent] = {}
    for event in events:
        if event.test not in results or event.is_terminal:
            results[event.test] = event
    return results
