"""Domain events emitted after a backend change is confirmed.

Events are logged and kept in a process-local buffer that the test-support
routes expose. Nothing is published for rejected or locally refused
operations.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging

logger = logging.getLogger(__name__)

STEP_APPENDED = "step.appended"
STEP_REMOVED = "step.removed"
STEPS_RENUMBERED = "steps.renumbered"
REFERENCE_ADDED = "reference.added"
REFERENCE_REMOVED = "reference.removed"

EVENT_BUFFER: List[Dict[str, Any]] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": dict(payload)})


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return a copy of the buffered events, emptying the buffer unless ``clear`` is false."""
    buffered = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return buffered


__all__ = [
    "STEP_APPENDED",
    "STEP_REMOVED",
    "STEPS_RENUMBERED",
    "REFERENCE_ADDED",
    "REFERENCE_REMOVED",
    "EVENT_BUFFER",
    "publish",
    "get_buffered_events",
]
