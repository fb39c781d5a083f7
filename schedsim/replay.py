"""
Read-only replay of a finished simulation against a virtual clock.

Used by step-by-step displays; nothing here re-runs a scheduler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .models import ProcessMetrics, SimulationResult

NOT_ARRIVED = "not-arrived"
WAITING = "waiting"
EXECUTING = "executing"
COMPLETED = "completed"


@dataclass(frozen=True)
class ProcessState:
    pid: str
    state: str
    # Time left in the current interval when executing.
    remaining_time: Optional[int] = None
    # Time since arrival when waiting.
    waiting_time: Optional[int] = None


def running_at(result: SimulationResult, time: int) -> Optional[str]:
    for iv in result.timeline:
        if iv.start_time <= time < iv.end_time:
            return iv.pid
    return None


def _state_of(result: SimulationResult, p: ProcessMetrics, time: int) -> ProcessState:
    if time < p.arrival_time:
        return ProcessState(pid=p.pid, state=NOT_ARRIVED)
    if time >= p.completion_time:
        return ProcessState(pid=p.pid, state=COMPLETED)
    for iv in result.intervals_for(p.pid):
        if iv.start_time <= time < iv.end_time:
            return ProcessState(pid=p.pid, state=EXECUTING, remaining_time=iv.end_time - time)
    return ProcessState(pid=p.pid, state=WAITING, waiting_time=time - p.arrival_time)


def process_states_at(result: SimulationResult, time: int) -> List[ProcessState]:
    return [_state_of(result, p, time) for p in result.processes]


def waiting_at(result: SimulationResult, time: int) -> List[str]:
    """
    Pids that have arrived, are unfinished and are not on the CPU at ``time``,
    ordered by arrival time then pid.

    This is the set of waiting processes, not the scheduler's queue order.
    """
    arrivals = {p.pid: p.arrival_time for p in result.processes}
    waiting = [s.pid for s in process_states_at(result, time) if s.state == WAITING]
    return sorted(waiting, key=lambda pid: (arrivals[pid], pid))
