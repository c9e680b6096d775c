"""Domain events and the fire-and-forget observability sink.

Events are emitted after the triggering state change has been applied.
Sinks are never read back by the engine.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from src.pm_common.enums import EventType

logger = logging.getLogger("pm.events")


@dataclass(frozen=True)
class DomainEvent:
    event_type: EventType
    subject_id: str          # market, pool or position id
    timestamp_ms: int
    payload: dict[str, Any] = field(default_factory=dict)


class EventSink(Protocol):
    def emit(self, event: DomainEvent) -> None: ...


class LoggingEventSink:
    """Default sink: one INFO line per event on the ``pm.events`` logger."""

    def emit(self, event: DomainEvent) -> None:
        logger.info(
            "%s %s at=%d %s",
            event.event_type.value,
            event.subject_id,
            event.timestamp_ms,
            event.payload,
        )


class RecordingEventSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    def emit(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: EventType) -> list[DomainEvent]:
        return [e for e in self.events if e.event_type == event_type]
