#parking_simulator\lot\config.py
from dataclasses import dataclass

from parking_simulator.core.errors import ParkingConfigError


@dataclass(frozen=True)
class LotConfig:
    capacity: int = 20

    # dwell time range in seconds
    dwell_min: float = 3.0
    dwell_max: float = 5.0

    def __post_init__(self):
        if self.capacity < 1:
            raise ParkingConfigError(f"capacity must be positive, got {self.capacity}")
        if self.dwell_min < 0 or self.dwell_max < 0:
            raise ParkingConfigError("dwell times must not be negative")
        if self.dwell_max < self.dwell_min:
            raise ParkingConfigError(
                f"dwell_max ({self.dwell_max}) must be >= dwell_min ({self.dwell_min})"
            )
