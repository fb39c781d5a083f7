from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


class SlotState(Enum):
    """Lifecycle of a process slot inside one simulation run."""

    PENDING = "pending"
    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class SimulatedProcess:
    """
    Per-run working copy of a Process.

    ``index`` is the position in the caller's input list and serves as the
    final tie-breaker when selecting between otherwise equal processes.
    """

    index: int
    pid: str
    arrival_time: int
    burst_time: int
    priority: Optional[int]
    remaining_time: int
    state: SlotState = SlotState.PENDING
    completion_time: Optional[int] = None

    @classmethod
    def from_process(cls, index: int, process: Process) -> "SimulatedProcess":
        return cls(
            index=index,
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            remaining_time=process.burst_time,
        )

    @property
    def done(self) -> bool:
        return self.state is SlotState.COMPLETED

    def complete(self, time: int) -> None:
        self.remaining_time = 0
        self.completion_time = time
        self.state = SlotState.COMPLETED

    def to_metrics(self) -> "ProcessMetrics":
        if self.completion_time is None:
            raise ValueError(f"Process {self.pid} has not completed")
        turnaround_time = self.completion_time - self.arrival_time
        return ProcessMetrics(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            completion_time=self.completion_time,
            waiting_time=turnaround_time - self.burst_time,
            turnaround_time=turnaround_time,
            priority=self.priority,
        )


@dataclass(frozen=True)
class Interval:
    """
    One contiguous block of CPU ownership by a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int
    color: str

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    priority: Optional[int] = None


@dataclass(frozen=True)
class SystemMetrics:
    average_waiting_time: float
    average_turnaround_time: float
    cpu_utilization: float
    throughput: float
    total_span: int
    cpu_busy_time: int


@dataclass(frozen=True)
class SimulationResult:
    algorithm: str
    timeline: Tuple[Interval, ...]
    processes: Tuple[ProcessMetrics, ...]
    metrics: SystemMetrics
    quantum: Optional[int] = None
    preemptive: bool = False

    def process(self, pid: str) -> ProcessMetrics:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)

    def intervals_for(self, pid: str) -> Tuple[Interval, ...]:
        return tuple(iv for iv in self.timeline if iv.pid == pid)

    def to_dict(self) -> dict:
        """
        Plain built-in representation, suitable for ``json.dumps``.
        """
        data = asdict(self)
        data["timeline"] = list(data["timeline"])
        data["processes"] = list(data["processes"])
        return data
