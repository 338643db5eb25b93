#tests\conftest.py

"""Pytest configuration and fixtures."""

import threading
import time
from collections import defaultdict

import pytest

from parking_simulator.core.journal import VehicleJournal
from parking_simulator.lot.config import LotConfig
from parking_simulator.lot.parking import ParkingLot


class DwellGate:
    """
    Dwell sampler that keeps each vehicle parked until the test releases it.

    Once open_all() is called every current and future vehicle leaves
    after `delay` seconds.
    """

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self._events = defaultdict(threading.Event)
        self._lock = threading.Lock()
        self._all_open = threading.Event()

    def _event(self, vehicle_id: int) -> threading.Event:
        with self._lock:
            return self._events[vehicle_id]

    def __call__(self, vehicle) -> float:
        gate = self._event(vehicle.id)
        while not gate.is_set() and not self._all_open.is_set():
            gate.wait(0.01)
        return self.delay

    def release(self, *vehicle_ids: int) -> None:
        for vid in vehicle_ids:
            self._event(vid).set()

    def open_all(self) -> None:
        self._all_open.set()


def _wait_until(predicate, timeout: float = 5.0, interval: float = 0.005) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


@pytest.fixture
def wait_until():
    """Poll a predicate until it holds or the timeout expires."""
    return _wait_until


@pytest.fixture
def journal():
    return VehicleJournal()


@pytest.fixture
def dwell_gate():
    gate = DwellGate()
    yield gate
    # let any parked vehicle threads finish
    gate.open_all()


@pytest.fixture
def make_lot(journal, dwell_gate):
    """Build a lot wired to the journal; dwell is controlled by dwell_gate."""
    lots = []

    def _make(capacity: int, dwell_sampler=None) -> ParkingLot:
        lot = ParkingLot(
            LotConfig(capacity=capacity, dwell_min=0.0, dwell_max=0.0),
            dwell_sampler=dwell_sampler or dwell_gate,
            event_emitter=journal,
        )
        lots.append(lot)
        return lot

    yield _make

    dwell_gate.open_all()
    for lot in lots:
        lot.wait_idle(timeout=5.0)
