#tests\test_arrivals.py

"""Test arrival generator."""

import random
import threading

import pytest

from parking_simulator.core.errors import ParkingConfigError
from parking_simulator.simulation.arrivals import ArrivalGenerator


class RecordingLot:
    """Stand-in lot that records the vehicles handed to enter()."""

    def __init__(self):
        self.entered = []
        self._lock = threading.Lock()

    def enter(self, vehicle):
        with self._lock:
            self.entered.append(vehicle.id)


class TestArrivalGenerator:
    """Test vehicle emission."""

    def test_emits_total_cars_in_order(self):
        """Test ids 1..T are emitted in order, then the channel closes."""
        lot = RecordingLot()
        generator = ArrivalGenerator(
            lot, arrival_rate=1.0, total_cars=25, interarrival_sampler=lambda: 0.0
        )

        generator.start()

        assert generator.join(timeout=5)
        assert generator.channel_closed.is_set()
        assert lot.entered == list(range(1, 26))
        assert generator.emitted == 25
        assert not generator.is_running

    def test_cancel_closes_channel(self, wait_until):
        """Test cancellation stops emission within one inter-arrival wait."""
        lot = RecordingLot()
        delays = iter([0.0, 0.0, 0.0])

        def sampler():
            # three quick arrivals, then a very long gap
            return next(delays, 60.0)

        generator = ArrivalGenerator(
            lot, arrival_rate=1.0, total_cars=None, interarrival_sampler=sampler
        )
        generator.start()

        assert wait_until(lambda: generator.emitted == 3)

        generator.cancel()

        assert generator.channel_closed.wait(1.0)
        assert generator.join(timeout=2)
        assert lot.entered == [1, 2, 3]

    def test_cancel_before_first_arrival(self):
        """Test cancelling early emits nothing."""
        lot = RecordingLot()
        generator = ArrivalGenerator(
            lot, arrival_rate=1.0, total_cars=10, interarrival_sampler=lambda: 60.0
        )
        generator.start()

        generator.cancel()

        assert generator.join(timeout=2)
        assert generator.emitted == 0
        assert lot.entered == []

    def test_default_sampler_is_exponential(self):
        """Test inter-arrival times have mean 1/rate."""
        generator = ArrivalGenerator(
            RecordingLot(), arrival_rate=4.0, rng=random.Random(7)
        )

        samples = [generator._sample_interarrival() for _ in range(20000)]

        assert all(s >= 0 for s in samples)
        assert sum(samples) / len(samples) == pytest.approx(0.25, rel=0.05)

    def test_start_twice_fails(self):
        """Test a generator can only be started once."""
        generator = ArrivalGenerator(
            RecordingLot(), arrival_rate=1.0, total_cars=1, interarrival_sampler=lambda: 0.0
        )
        generator.start()

        with pytest.raises(RuntimeError):
            generator.start()
        generator.join(timeout=2)

    @pytest.mark.parametrize("kwargs", [
        {"arrival_rate": 0},
        {"arrival_rate": -1.0},
        {"arrival_rate": 1.0, "total_cars": 0},
    ])
    def test_misconfiguration_fails(self, kwargs):
        """Test invalid rate or count is rejected."""
        with pytest.raises(ParkingConfigError):
            ArrivalGenerator(RecordingLot(), **kwargs)
