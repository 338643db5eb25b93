# parking_simulator/lot/parking.py
"""Parking lot - admits, queues and releases vehicles concurrently."""

import logging
import queue
import random
import threading
import time
from typing import Callable, List, Optional, Tuple

from parking_simulator.core.errors import ParkingInvariantError
from parking_simulator.core.events import EventEmitter, NullEventEmitter
from parking_simulator.core.events_model import LotEvent
from parking_simulator.core.models import GateSignal, LotSnapshot, Vehicle
from parking_simulator.lot.config import LotConfig
from parking_simulator.lot.permits import PermitPool
from parking_simulator.lot.rwlock import ReadWriteLock
from parking_simulator.lot.spots import SpotTable
from parking_simulator.observer.contract import LotObserver

logger = logging.getLogger(__name__)


class ParkingLot(LotObserver):
    """
    Bounded parking lot shared by arrival, dwell and display threads.

    Locking discipline:
    - The spot table, the permit pool and the wait queue only change while
      the write lock is held. Permit and queue operations are non-blocking,
      so nothing ever waits while holding the lock.
    - Enter: permit first, then assign a spot; without a permit, enqueue or drop.
    - Exit: free the spot, release the permit, then dequeue one waiter.
    - Dequeued waiters are re-admitted on their own thread, never inline.
    - Events are emitted inside the critical section so their order matches
      the order of state changes.
    """

    def __init__(
        self,
        config: LotConfig,
        *,
        dwell_sampler: Optional[Callable[[Vehicle], float]] = None,
        event_emitter: Optional[EventEmitter] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self._rng = rng or random.Random()
        self._dwell_sampler = dwell_sampler or self._sample_dwell
        self._events = event_emitter or NullEventEmitter()

        self._state_lock = ReadWriteLock()
        self._spots = SpotTable(config.capacity)
        self._permits = PermitPool(config.capacity)
        self._waiting: "queue.Queue[Vehicle]" = queue.Queue(maxsize=config.capacity)
        self._gate = GateSignal.IDLE

        # Dwell timers and re-admissions still running
        self._tasks_cond = threading.Condition()
        self._outstanding = 0

        # Re-admissions run in dequeue order: ticket handed out at dequeue
        self._readmit_cond = threading.Condition()
        self._next_ticket = 0
        self._serving_ticket = 0
        self._abandoned_tickets = set()

    @property
    def capacity(self) -> int:
        return self.config.capacity

    # -------------------------
    # ADMISSION
    # -------------------------

    def enter(self, vehicle: Optional[Vehicle]) -> None:
        """Try to park vehicle; queue it when full, drop it when the queue is full too."""
        if vehicle is None:
            logger.warning("[lot] enter() called without a vehicle, ignoring")
            return
        if vehicle.id <= 0:
            logger.warning(f"[lot] Vehicle id must be positive, got {vehicle.id}, ignoring")
            return

        try:
            self._admit(vehicle, arriving=True)
        except Exception as e:
            logger.error(f"[lot] Error admitting vehicle {vehicle.id}: {e}", exc_info=True)

    def _admit(self, vehicle: Vehicle, *, arriving: bool) -> None:
        spot = None
        queued = False

        with self._state_lock.write_locked():
            events = [LotEvent.vehicle_arrived(vehicle)] if arriving else []

            if self._permits.try_acquire():
                spot = self._spots.find_next_spot()
                if spot is None:
                    self._permits.release()
                    raise ParkingInvariantError(
                        f"Permit acquired for vehicle {vehicle.id} but no spot is free"
                    )
                self._spots.assign(spot, vehicle.id)
                self._gate = GateSignal.ENTERED
                events.append(LotEvent.vehicle_parked(vehicle, spot))
                self._task_reserved()
            else:
                try:
                    self._waiting.put_nowait(vehicle)
                except queue.Full:
                    self._gate = GateSignal.DROPPED
                    events.append(LotEvent.vehicle_dropped(vehicle))
                else:
                    queued = True
                    self._gate = GateSignal.WAITING
                    events.append(LotEvent.vehicle_queued(vehicle, self._waiting.qsize()))

            self._emit(events)

        if spot is not None:
            logger.info(f"[lot] Vehicle {vehicle.id} parked in spot {spot}")
            self._start_task(self._dwell, vehicle, name=f"dwell-{vehicle.id}")
        elif queued:
            logger.info(f"[lot] Vehicle {vehicle.id} waiting for a spot")
        else:
            logger.warning(
                f"[lot] Vehicle {vehicle.id} dropped: lot and wait queue are full "
                f"({self.capacity} waiting)"
            )

    # -------------------------
    # DEPARTURE
    # -------------------------

    def exit(self, vehicle: Optional[Vehicle]) -> None:
        """Release vehicle's spot and wake the head of the wait queue."""
        if vehicle is None:
            logger.warning("[lot] exit() called without a vehicle, ignoring")
            return

        try:
            self._depart(vehicle)
        except Exception as e:
            logger.error(f"[lot] Error releasing vehicle {vehicle.id}: {e}", exc_info=True)

    def _depart(self, vehicle: Vehicle) -> None:
        waiter = None
        ticket = None

        with self._state_lock.write_locked():
            spot = self._spots.release_vehicle(vehicle.id)

            if spot is None:
                self._emit([LotEvent.vehicle_exit_unknown(vehicle)])
            else:
                self._permits.release()
                self._gate = GateSignal.EXITED
                events = [LotEvent.vehicle_departed(vehicle, spot)]
                try:
                    waiter = self._waiting.get_nowait()
                except queue.Empty:
                    waiter = None
                else:
                    self._task_reserved()
                    ticket = self._next_ticket
                    self._next_ticket += 1
                self._emit(events)

        if spot is None:
            logger.warning(f"[lot] Vehicle {vehicle.id} was not in the lot, nothing to release")
            return

        logger.info(f"[lot] Vehicle {vehicle.id} left spot {spot}")

        if waiter is not None:
            logger.info(f"[lot] Waking vehicle {waiter.id} from the wait queue")
            self._start_task(
                self._readmit, waiter, ticket,
                name=f"readmit-{waiter.id}",
                on_abort=lambda: self._abandon_readmit(waiter, ticket),
            )

    # -------------------------
    # BACKGROUND TASKS
    # -------------------------

    def _sample_dwell(self, vehicle: Vehicle) -> float:
        return self._rng.uniform(self.config.dwell_min, self.config.dwell_max)

    def _dwell(self, vehicle: Vehicle) -> None:
        delay = self._dwell_sampler(vehicle)
        time.sleep(max(0.0, delay))
        self.exit(vehicle)

    def _readmit(self, vehicle: Vehicle, ticket: int) -> None:
        with self._readmit_cond:
            self._readmit_cond.wait_for(lambda: self._serving_ticket == ticket)
        try:
            self._admit(vehicle, arriving=False)
        finally:
            with self._readmit_cond:
                self._serving_ticket += 1
                self._skip_abandoned_tickets()
                self._readmit_cond.notify_all()

    def _abandon_readmit(self, vehicle: Vehicle, ticket: int) -> None:
        """Give up on a dequeued waiter whose re-admission thread never started."""
        with self._state_lock.write_locked():
            self._gate = GateSignal.DROPPED
            self._emit([LotEvent.vehicle_dropped(vehicle)])

        with self._readmit_cond:
            self._abandoned_tickets.add(ticket)
            self._skip_abandoned_tickets()
            self._readmit_cond.notify_all()

        logger.warning(f"[lot] Vehicle {vehicle.id} dropped: could not start its re-admission")

    def _skip_abandoned_tickets(self) -> None:
        # caller holds _readmit_cond
        while self._serving_ticket in self._abandoned_tickets:
            self._abandoned_tickets.discard(self._serving_ticket)
            self._serving_ticket += 1

    def _task_reserved(self) -> None:
        with self._tasks_cond:
            self._outstanding += 1

    def _task_finished(self) -> None:
        with self._tasks_cond:
            self._outstanding -= 1
            self._tasks_cond.notify_all()

    def _start_task(self, target, vehicle: Vehicle, *args, name: str, on_abort=None) -> None:
        """Run target on a daemon thread; the task slot was reserved under the write lock."""
        thread = threading.Thread(
            target=self._run_task,
            args=(target, vehicle) + args,
            name=name,
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError:
            # the thread never ran, so hand back its reservation
            try:
                if on_abort is not None:
                    on_abort()
            finally:
                self._task_finished()
            raise

    def _run_task(self, target, vehicle: Vehicle, *args) -> None:
        try:
            target(vehicle, *args)
        except Exception as e:
            logger.error(f"[lot] [{vehicle.id}] Background task failed: {e}", exc_info=True)
        finally:
            self._task_finished()

    @property
    def outstanding_tasks(self) -> int:
        return self._outstanding

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every dwell timer and re-admission has finished.

        Returns:
            True if the lot went idle, False on timeout
        """
        with self._tasks_cond:
            return self._tasks_cond.wait_for(lambda: self._outstanding == 0, timeout)

    def _emit(self, events: List[LotEvent]) -> None:
        try:
            self._events.emit(events)
        except Exception as e:
            logger.error(f"[lot] Event emitter failed: {e}", exc_info=True)

    # -------------------------
    # OBSERVER
    # -------------------------

    def snapshot(self) -> LotSnapshot:
        with self._state_lock.read_locked():
            occupied, holder = self._spots.copy()
            return LotSnapshot(
                occupied=occupied,
                holder=holder,
                available_permits=self._permits.available,
                cursor=self._spots.cursor,
                waiting=self._waiting_ids_unlocked(),
                gate=self._gate,
            )

    def occupied_spaces(self) -> Tuple[List[bool], List[int]]:
        with self._state_lock.read_locked():
            return self._spots.copy()

    def waiting_ids(self) -> List[int]:
        with self._state_lock.read_locked():
            return self._waiting_ids_unlocked()

    def _waiting_ids_unlocked(self) -> List[int]:
        with self._waiting.mutex:
            return [v.id for v in self._waiting.queue]

    def waiting_count(self) -> int:
        return self._waiting.qsize()

    def peek_waiting(self) -> Optional[Vehicle]:
        with self._state_lock.write_locked():
            try:
                return self._waiting.get_nowait()
            except queue.Empty:
                return None

    def __repr__(self) -> str:
        return (
            f"<ParkingLot(capacity={self.capacity}, "
            f"occupied={self._spots.occupied_count()}, "
            f"permits={self._permits.available}, "
            f"waiting={self._waiting.qsize()})>"
        )
