"""Core domain models (vehicles, lot snapshots)."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class VehicleState(Enum):
    """Vehicle lifecycle."""

    ARRIVING = "ARRIVING"
    PARKED = "PARKED"
    WAITING = "WAITING"
    DROPPED = "DROPPED"
    DEPARTED = "DEPARTED"


class GateSignal(Enum):
    """Latest activity seen at the lot gate."""

    IDLE = "IDLE"
    ENTERED = "ENTERED"
    EXITED = "EXITED"
    WAITING = "WAITING"
    DROPPED = "DROPPED"


@dataclass(frozen=True)
class Vehicle:
    """A car arriving at the lot, numbered in arrival order."""

    id: int

    def __repr__(self) -> str:
        return f"<Vehicle(id={self.id})>"


@dataclass(frozen=True)
class LotSnapshot:
    """Consistent copy of the lot state taken under the reader lock."""

    occupied: List[bool]
    holder: List[int]
    available_permits: int
    cursor: int = 0
    waiting: List[int] = field(default_factory=list)
    gate: GateSignal = GateSignal.IDLE

    @property
    def capacity(self) -> int:
        return len(self.occupied)

    @property
    def occupied_count(self) -> int:
        return sum(1 for o in self.occupied if o)

    @property
    def free_count(self) -> int:
        return self.capacity - self.occupied_count

    def parked_ids(self) -> List[int]:
        """Ids of parked vehicles in spot order."""
        return [vid for vid in self.holder if vid != 0]
