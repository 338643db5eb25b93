"""Event models for the parking lot."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LotEvent:
    """Something that happened to a vehicle at the lot."""

    event_type: str
    vehicle_id: int
    timestamp: datetime = field(default_factory=_now)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def vehicle_arrived(vehicle):
        """Vehicle reached the gate (first admission attempt)."""
        return LotEvent(
            event_type="vehicle.arrived",
            vehicle_id=vehicle.id,
        )

    @staticmethod
    def vehicle_parked(vehicle, spot: int):
        """Vehicle was assigned a spot."""
        return LotEvent(
            event_type="vehicle.parked",
            vehicle_id=vehicle.id,
            metadata={"spot": spot},
        )

    @staticmethod
    def vehicle_queued(vehicle, queue_depth: int):
        """Vehicle found the lot full and joined the wait queue."""
        return LotEvent(
            event_type="vehicle.queued",
            vehicle_id=vehicle.id,
            metadata={"queue_depth": queue_depth},
        )

    @staticmethod
    def vehicle_dropped(vehicle):
        """Lot and wait queue were both full."""
        return LotEvent(
            event_type="vehicle.dropped",
            vehicle_id=vehicle.id,
        )

    @staticmethod
    def vehicle_departed(vehicle, spot: int):
        """Vehicle left its spot after its dwell time."""
        return LotEvent(
            event_type="vehicle.departed",
            vehicle_id=vehicle.id,
            metadata={"spot": spot},
        )

    @staticmethod
    def vehicle_exit_unknown(vehicle):
        """Exit requested for a vehicle that holds no spot."""
        return LotEvent(
            event_type="vehicle.exit_unknown",
            vehicle_id=vehicle.id,
        )
