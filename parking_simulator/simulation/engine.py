# parking_simulator/simulation/engine.py
"""Simulation - wires the lot, the arrival stream and the status reporter."""

import logging
import random
import threading
from typing import Callable, Optional

from parking_simulator.core.events import LoggingEventEmitter, MultiEventEmitter
from parking_simulator.core.journal import VehicleJournal
from parking_simulator.core.models import Vehicle, VehicleState
from parking_simulator.lot.parking import ParkingLot
from parking_simulator.observer.reporter import StatusReporter
from parking_simulator.simulation.arrivals import ArrivalGenerator
from parking_simulator.simulation.config import SimulationSettings
from parking_simulator.simulation.schemas import SimulationSummary

logger = logging.getLogger(__name__)


class Simulation:
    """
    One parking lot fed by one arrival stream.

    Lifecycle:
    - start(): arrivals begin, reporter starts polling
    - stop(): arrivals are cancelled; parked vehicles finish their dwell
      time (in-flight dwell timers are never cancelled)
    """

    def __init__(
        self,
        settings: SimulationSettings,
        *,
        dwell_sampler: Optional[Callable[[Vehicle], float]] = None,
        interarrival_sampler: Optional[Callable[[], float]] = None,
        report: bool = True,
    ):
        self.settings = settings
        self._rng = random.Random(settings.seed)

        self.journal = VehicleJournal()
        self.lot = ParkingLot(
            settings.lot_config(),
            dwell_sampler=dwell_sampler,
            event_emitter=MultiEventEmitter([self.journal, LoggingEventEmitter()]),
            rng=self._rng,
        )
        self.generator = ArrivalGenerator(
            self.lot,
            arrival_rate=settings.arrival_rate,
            total_cars=settings.total_cars,
            interarrival_sampler=interarrival_sampler,
            rng=self._rng,
        )
        self.reporter = StatusReporter(self.lot, settings.report_interval) if report else None

        self._started = False
        self._stopped = threading.Event()

    def start(self):
        if self._started:
            raise RuntimeError("Simulation already started")
        self._started = True

        logger.info(f"[simulation] 🚀 Starting simulation")
        logger.info(f"[simulation] Capacity: {self.settings.capacity}")
        logger.info(f"[simulation] Arrival rate: {self.settings.arrival_rate}/s")
        logger.info(
            f"[simulation] Dwell time: {self.settings.dwell_min}s - {self.settings.dwell_max}s"
        )

        if self.reporter:
            self.reporter.start()
        self.generator.start()

    def stop(self, wait_for_departures: bool = True, timeout: Optional[float] = None) -> bool:
        """
        Cancel arrivals and optionally wait for parked vehicles to leave.

        Returns:
            True if everything drained within timeout
        """
        if self._stopped.is_set():
            return True

        logger.info("[simulation] 🛑 Stopping simulation")
        self.generator.cancel()
        drained = self.generator.join(timeout)

        if wait_for_departures:
            logger.info("[simulation] Waiting for parked vehicles to depart")
            drained = self.lot.wait_idle(timeout) and drained

        if self.reporter:
            self.reporter.stop()

        self._stopped.set()
        logger.info(f"[simulation] Stopped (drained={drained})")
        return drained

    def run(self, duration: Optional[float] = None) -> SimulationSummary:
        """
        Run until every arrival was emitted (or duration elapsed), then drain.
        """
        self.start()
        self.generator.channel_closed.wait(duration)
        self.stop(wait_for_departures=True)
        summary = self.summary()
        logger.info(f"[simulation] ✅ Finished: {summary.model_dump()}")
        return summary

    def request_stop(self):
        """Cancel arrivals without blocking (safe from signal handlers)."""
        self.generator.cancel()

    def summary(self) -> SimulationSummary:
        snapshot = self.lot.snapshot()
        return SimulationSummary(
            capacity=self.lot.capacity,
            emitted=self.generator.emitted,
            parked=self.journal.transitions_into(VehicleState.PARKED),
            departed=self.journal.transitions_into(VehicleState.DEPARTED),
            dropped=self.journal.transitions_into(VehicleState.DROPPED),
            waiting=list(snapshot.waiting),
            occupied=snapshot.occupied_count,
            unknown_exits=len(self.journal.unknown_exits()),
        )
