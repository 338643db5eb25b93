# parking_simulator/simulation/arrivals.py
"""Arrival generator - Poisson stream of vehicles feeding the lot."""

import logging
import queue
import random
import threading
from typing import Callable, Optional

from parking_simulator.core.errors import ParkingConfigError
from parking_simulator.core.models import Vehicle

logger = logging.getLogger(__name__)

# Marks the hand-off channel as closed
_CLOSED = object()


class ArrivalGenerator:
    """
    Emits vehicles 1, 2, ... at exponential inter-arrival times.

    Two threads:
    - emitter: sleeps Exponential(arrival_rate) seconds, then hands the next
      vehicle over a channel of size 1
    - drainer: takes vehicles off the channel and calls lot.enter()

    Emission stops after total_cars vehicles or on cancel(); either way
    the channel is closed and the drainer exits once it is empty.
    """

    def __init__(
        self,
        lot,
        *,
        arrival_rate: float,
        total_cars: Optional[int] = None,
        interarrival_sampler: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ):
        if arrival_rate <= 0:
            raise ParkingConfigError(f"arrival_rate must be positive, got {arrival_rate}")
        if total_cars is not None and total_cars < 1:
            raise ParkingConfigError(f"total_cars must be positive, got {total_cars}")

        self.lot = lot
        self.arrival_rate = arrival_rate
        self.total_cars = total_cars
        self._rng = rng or random.Random()
        self._interarrival = interarrival_sampler or self._sample_interarrival

        self._channel: "queue.Queue" = queue.Queue(maxsize=1)
        self._cancel_event = threading.Event()
        self.channel_closed = threading.Event()
        self._emitted = 0
        self._emitter_thread: Optional[threading.Thread] = None
        self._drainer_thread: Optional[threading.Thread] = None

    @property
    def emitted(self) -> int:
        """Number of vehicles handed to the drainer so far."""
        return self._emitted

    @property
    def is_running(self) -> bool:
        threads = (self._emitter_thread, self._drainer_thread)
        return any(t is not None and t.is_alive() for t in threads)

    def start(self):
        """Start emitter and drainer threads."""
        if self._emitter_thread is not None:
            raise RuntimeError("ArrivalGenerator already started")

        total = self.total_cars if self.total_cars is not None else "unbounded"
        logger.info(f"[arrivals] 🚗 Starting arrivals: rate={self.arrival_rate}/s, total={total}")

        self._emitter_thread = threading.Thread(
            target=self._emit_loop, name="arrivals-emitter", daemon=True
        )
        self._drainer_thread = threading.Thread(
            target=self._drain_loop, name="arrivals-drainer", daemon=True
        )
        self._drainer_thread.start()
        self._emitter_thread.start()

    def cancel(self):
        """Stop emitting; vehicles already in the lot are not affected."""
        logger.info("[arrivals] Cancelling arrivals")
        self._cancel_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for both threads to finish.

        Returns:
            True if both finished within timeout
        """
        for thread in (self._emitter_thread, self._drainer_thread):
            if thread is not None:
                thread.join(timeout)
        return not self.is_running

    def _sample_interarrival(self) -> float:
        return self._rng.expovariate(self.arrival_rate)

    def _emit_loop(self):
        next_id = 1
        try:
            while self.total_cars is None or next_id <= self.total_cars:
                delay = max(0.0, self._interarrival())
                if self._cancel_event.wait(delay):
                    break
                self._channel.put(Vehicle(id=next_id))
                self._emitted = next_id
                logger.debug(f"[arrivals] Vehicle {next_id} arrived")
                next_id += 1
        except Exception as e:
            logger.error(f"[arrivals] Error in emitter loop: {e}", exc_info=True)
        finally:
            self._channel.put(_CLOSED)
            self.channel_closed.set()
            logger.info(f"[arrivals] Channel closed after {self._emitted} vehicle(s)")

    def _drain_loop(self):
        while True:
            vehicle = self._channel.get()
            if vehicle is _CLOSED:
                break
            self.lot.enter(vehicle)
        logger.debug("[arrivals] Drainer finished")

    def __repr__(self) -> str:
        return f"<ArrivalGenerator(rate={self.arrival_rate}, emitted={self._emitted})>"
