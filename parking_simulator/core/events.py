"""Event emitters for the parking lot."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from parking_simulator.core.events_model import LotEvent

logger = logging.getLogger(__name__)


ALLOWED_EVENTS = {
    "vehicle.arrived",
    "vehicle.parked",
    "vehicle.queued",
    "vehicle.dropped",
    "vehicle.departed",
    "vehicle.exit_unknown",
}


class EventEmitter(ABC):
    """Abstract event emitter."""

    @abstractmethod
    def emit(self, events: Iterable[LotEvent]) -> None:
        """Emit one or more events."""
        pass


class LoggingEventEmitter(EventEmitter):
    """Writes every event to the debug log."""

    def emit(self, events: Iterable[LotEvent]) -> None:
        for event in events:
            if event.event_type not in ALLOWED_EVENTS:
                raise ValueError(f"Invalid event type: {event.event_type}")
            logger.debug(
                f"[EVENT] {event.event_type} | vehicle={event.vehicle_id} {event.metadata}"
            )


class MultiEventEmitter(EventEmitter):
    """Fan-out to multiple emitters."""

    def __init__(self, emitters: Iterable[EventEmitter]):
        self._emitters = list(emitters)

    def emit(self, events: Iterable[LotEvent]) -> None:
        """Emit to all emitters."""
        events = list(events)
        for emitter in self._emitters:
            emitter.emit(events)


class NullEventEmitter(EventEmitter):
    """No-op emitter (used when events are not needed)."""

    def emit(self, events: Iterable[LotEvent]) -> None:
        """Do nothing."""
        pass
