# parking_simulator/observer/contract.py

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from parking_simulator.core.models import LotSnapshot, Vehicle


class LotObserver(ABC):
    """
    Read side of the lot, as seen by a display.
    """

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Number of spots."""
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> LotSnapshot:
        """
        Consistent copy of occupancy, holders and permits.
        Freshly allocated on every call.
        """
        raise NotImplementedError

    @abstractmethod
    def occupied_spaces(self) -> Tuple[List[bool], List[int]]:
        """
        (occupied, holder) pair taken from one snapshot.
        """
        raise NotImplementedError

    @abstractmethod
    def waiting_ids(self) -> List[int]:
        """
        Ids in the wait queue, head first. Does not consume the queue.
        """
        raise NotImplementedError

    @abstractmethod
    def waiting_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def peek_waiting(self) -> Optional[Vehicle]:
        """
        Remove and return the head of the wait queue, or None.
        The vehicle is consumed; displays should prefer waiting_ids().
        """
        raise NotImplementedError
