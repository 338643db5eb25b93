# parking_simulator/core/journal.py
"""Vehicle journal - tracks every vehicle's lifecycle from lot events."""

import logging
from threading import Lock
from typing import Dict, Iterable, List, Optional

from parking_simulator.core.events import ALLOWED_EVENTS, EventEmitter
from parking_simulator.core.events_model import LotEvent
from parking_simulator.core.models import VehicleState
from parking_simulator.core.state_machine import VehicleStateMachine

logger = logging.getLogger(__name__)


EVENT_STATES = {
    "vehicle.parked": VehicleState.PARKED,
    "vehicle.queued": VehicleState.WAITING,
    "vehicle.dropped": VehicleState.DROPPED,
    "vehicle.departed": VehicleState.DEPARTED,
}


class VehicleJournal(EventEmitter):
    """
    In-memory record of vehicle states.

    Every transition is checked against the vehicle state machine, so a
    journal that accepted a whole run is itself evidence that each vehicle
    followed ARRIVING -> {PARKED, WAITING, DROPPED} -> ... -> terminal.
    """

    def __init__(self):
        self._states: Dict[int, VehicleState] = {}
        self._park_order: List[int] = []
        self._queue_order: List[int] = []
        self._transitions: Dict[VehicleState, int] = {state: 0 for state in VehicleState}
        self._unknown_exits: List[int] = []
        self._lock = Lock()

    def emit(self, events: Iterable[LotEvent]) -> None:
        with self._lock:
            for event in events:
                if event.event_type not in ALLOWED_EVENTS:
                    raise ValueError(f"Invalid event type: {event.event_type}")
                self._apply(event)

    def _apply(self, event: LotEvent) -> None:
        vid = event.vehicle_id

        if event.event_type == "vehicle.arrived":
            if vid not in self._states:
                self._states[vid] = VehicleState.ARRIVING
                self._transitions[VehicleState.ARRIVING] += 1
            return

        if event.event_type == "vehicle.exit_unknown":
            self._unknown_exits.append(vid)
            return

        new_state = EVENT_STATES[event.event_type]
        current = self._states.get(vid, VehicleState.ARRIVING)
        self._states[vid] = VehicleStateMachine.transition(current, new_state)
        self._transitions[new_state] += 1

        if new_state == VehicleState.PARKED:
            self._park_order.append(vid)
        elif new_state == VehicleState.WAITING and current == VehicleState.ARRIVING:
            self._queue_order.append(vid)

    # -------------------------
    # QUERIES
    # -------------------------

    def state_of(self, vehicle_id: int) -> Optional[VehicleState]:
        with self._lock:
            return self._states.get(vehicle_id)

    def ids_in(self, state: VehicleState) -> List[int]:
        with self._lock:
            return sorted(vid for vid, s in self._states.items() if s == state)

    def known_ids(self) -> List[int]:
        with self._lock:
            return sorted(self._states)

    def park_order(self) -> List[int]:
        """Vehicle ids in the order they parked."""
        with self._lock:
            return list(self._park_order)

    def queue_order(self) -> List[int]:
        """Vehicle ids in the order they first joined the wait queue."""
        with self._lock:
            return list(self._queue_order)

    def transitions_into(self, state: VehicleState) -> int:
        with self._lock:
            return self._transitions[state]

    def unknown_exits(self) -> List[int]:
        with self._lock:
            return list(self._unknown_exits)

    def counts(self) -> Dict[str, int]:
        """Current number of vehicles per state."""
        with self._lock:
            counts = {state.value: 0 for state in VehicleState}
            for state in self._states.values():
                counts[state.value] += 1
            return counts

    def __repr__(self) -> str:
        return f"<VehicleJournal(vehicles={len(self._states)})>"
