# parking_simulator/core/errors.py

# -----------------------------
# Base Errors
# -----------------------------

class ParkingError(Exception):
    """Base class for all parking simulator errors."""
    pass


# -----------------------------
# Configuration Errors
# -----------------------------

class ParkingConfigError(ParkingError):
    """Invalid capacity, dwell range or arrival rate."""
    pass


# -----------------------------
# Lot State Errors
# -----------------------------

class ParkingInvariantError(ParkingError):
    """Lot bookkeeping disagrees with itself (permits vs. spots)."""
    pass


class InvalidVehicleTransition(ParkingError):
    """Illegal vehicle state transition attempted."""
    pass
