#parking_simulator\lot\permits.py

from threading import Lock

from parking_simulator.core.errors import ParkingConfigError, ParkingInvariantError


class PermitPool:
    """Counting semaphore with non-blocking acquire and an observable count."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ParkingConfigError("capacity must be at least 1")
        self._capacity = capacity
        self._available = capacity
        self._lock = Lock()

    def try_acquire(self) -> bool:
        with self._lock:
            if self._available == 0:
                return False
            self._available -= 1
            return True

    def release(self) -> None:
        with self._lock:
            if self._available >= self._capacity:
                raise ParkingInvariantError(
                    f"Permit released over capacity {self._capacity}"
                )
            self._available += 1

    @property
    def available(self) -> int:
        return self._available

    @property
    def capacity(self) -> int:
        return self._capacity

    def __repr__(self) -> str:
        return f"<PermitPool(available={self._available}/{self._capacity})>"
