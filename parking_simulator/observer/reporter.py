# parking_simulator/observer/reporter.py
"""Status reporter - text stand-in for the lot's stats panel."""

import logging
import threading
from typing import Optional

from parking_simulator.core.models import LotSnapshot
from parking_simulator.observer.contract import LotObserver
from parking_simulator.simulation.schemas import LotStatus

logger = logging.getLogger(__name__)

FREE_MARK = "."


def status_from_snapshot(snapshot: LotSnapshot) -> LotStatus:
    return LotStatus(
        total=snapshot.capacity,
        occupied=snapshot.occupied_count,
        free=snapshot.free_count,
        waiting=list(snapshot.waiting),
        gate=snapshot.gate.value,
    )


def render_spots(snapshot: LotSnapshot) -> str:
    """One cell per spot: the parked vehicle id, or '.' when free."""
    cells = [
        str(vid) if occupied else FREE_MARK
        for occupied, vid in zip(snapshot.occupied, snapshot.holder)
    ]
    return "[" + " ".join(cells) + "]"


def render_status(snapshot: LotSnapshot) -> str:
    status = status_from_snapshot(snapshot)
    waiting = ", ".join(str(vid) for vid in status.waiting) or "none"
    return (
        f"TOTAL {status.total} | OCCUPIED {status.occupied} | FREE {status.free} "
        f"| WAITING {waiting} | GATE {status.gate} {render_spots(snapshot)}"
    )


class StatusReporter:
    """
    Polls the lot on a fixed interval and logs one status line per tick.

    Only reads through the observer contract; the wait queue is never consumed.
    """

    def __init__(self, lot: LotObserver, interval: float = 0.7):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.lot = lot
        self.interval = interval
        self.ticks = 0
        self.last_status: Optional[LotStatus] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self):
        logger.info(f"[reporter] Reporting lot status every {self.interval}s")
        self._thread = threading.Thread(target=self._run_loop, name="status-reporter", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join()

    def report_once(self) -> LotStatus:
        snapshot = self.lot.snapshot()
        self.last_status = status_from_snapshot(snapshot)
        self.ticks += 1
        logger.info(f"[reporter] {render_status(snapshot)}")
        return self.last_status

    def _run_loop(self):
        while not self._stop_event.wait(self.interval):
            try:
                self.report_once()
            except Exception as e:
                logger.error(f"[reporter] Error reading lot status: {e}", exc_info=True)
