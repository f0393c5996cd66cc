from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import List, Optional


def _new_pid() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class Process:
    name: str
    burst_time: float
    pid: str = field(default_factory=_new_pid)
    remaining_time: float = field(init=False)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.burst_time) and self.burst_time > 0):
            raise ValueError(f"Burst time must be a positive finite number: {self.name} ({self.burst_time})")
        self.remaining_time = self.burst_time


@dataclass(frozen=True)
class RunSegment:
    """
    One contiguous interval during which a process held the processor.
    """

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class ExecutionEntry:
    process: Process
    entry_time: float
    execution_times: List[RunSegment] = field(default_factory=list)


@dataclass
class Arrival:
    """
    A process scheduled to be added at a given simulated time.
    """

    name: str
    arrival_time: float
    burst_time: float


@dataclass
class ReadyProcess:
    name: str
    remaining_time: float
    running: bool = False


@dataclass
class ProcessStats:
    pid: str
    name: str
    burst_time: float
    entry_time: float
    segments: List[RunSegment]
    waiting_time: float
    service_time: float
    completed: bool


@dataclass
class PendingProcess:
    """
    A process that was added but has not run yet; it has no service time.
    """

    pid: str
    name: str
    burst_time: float
    entry_time: float
    waiting_since: float


@dataclass
class SchedulerReport:
    processes: List[ProcessStats] = field(default_factory=list)
    pending: List[PendingProcess] = field(default_factory=list)
    avg_waiting: float = 0.0
    avg_service: float = 0.0
    generated_at: Optional[float] = None
