from typing import List

from pydantic import BaseModel


class SimulationSummary(BaseModel):
    capacity: int
    emitted: int
    parked: int
    departed: int
    dropped: int
    waiting: List[int]
    occupied: int
    unknown_exits: int = 0


class LotStatus(BaseModel):
    total: int
    occupied: int
    free: int
    waiting: List[int]
    gate: str
