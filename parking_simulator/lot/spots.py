#parking_simulator\lot\spots.py

"""Spot table - which vehicle holds which spot."""

from typing import List, Optional

from parking_simulator.core.errors import ParkingConfigError, ParkingInvariantError


class SpotTable:
    """
    Occupancy state of the lot.

    Not thread-safe; ParkingLot guards it with its write lock.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ParkingConfigError("capacity must be at least 1")

        self._capacity = capacity
        self.occupied: List[bool] = [False] * capacity
        self.holder: List[int] = [0] * capacity
        self.cursor = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def find_next_spot(self) -> Optional[int]:
        """First free spot scanning round-robin from the cursor."""
        for offset in range(self._capacity):
            index = (self.cursor + offset) % self._capacity
            if not self.occupied[index]:
                return index
        return None

    def assign(self, spot: int, vehicle_id: int) -> None:
        """Park vehicle in spot and move the cursor past it."""
        if vehicle_id <= 0:
            raise ValueError(f"Invalid vehicle id {vehicle_id}")
        if self.occupied[spot]:
            raise ParkingInvariantError(
                f"Spot {spot} already occupied by vehicle {self.holder[spot]}"
            )
        self.occupied[spot] = True
        self.holder[spot] = vehicle_id
        self.cursor = (spot + 1) % self._capacity

    def find_spot_by_vehicle(self, vehicle_id: int) -> Optional[int]:
        """Find spot held by given vehicle."""
        for index, holder in enumerate(self.holder):
            if holder == vehicle_id:
                return index
        return None

    def release_vehicle(self, vehicle_id: int) -> Optional[int]:
        """Free the spot held by vehicle; returns its index or None."""
        spot = self.find_spot_by_vehicle(vehicle_id)
        if spot is None:
            return None
        self.occupied[spot] = False
        self.holder[spot] = 0
        return spot

    def occupied_count(self) -> int:
        return sum(1 for o in self.occupied if o)

    def free_count(self) -> int:
        return self._capacity - self.occupied_count()

    def copy(self):
        """Fresh copies of (occupied, holder)."""
        return list(self.occupied), list(self.holder)

    def __repr__(self) -> str:
        return (
            f"<SpotTable(total={self._capacity}, "
            f"occupied={self.occupied_count()}, "
            f"cursor={self.cursor})>"
        )
