from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence, Tuple

from .colors import process_color
from .config import ALGORITHM_NAMES, SAFETY_MARGIN
from .errors import InvalidWorkloadError, SimulationBoundExceeded
from .metrics import compute_system_metrics
from .models import Interval, Process, SimulatedProcess, SimulationResult, SlotState
from .timeline import IntervalBuilder
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

# Smaller key wins. Every key ends with (arrival, input index) so ties resolve
# to the earliest arrival, then to whichever process the caller listed first.
SelectionKey = Callable[[SimulatedProcess], tuple]


def _burst_key(p: SimulatedProcess) -> tuple:
    return (p.burst_time, p.arrival_time, p.index)


def _remaining_key(p: SimulatedProcess) -> tuple:
    return (p.remaining_time, p.arrival_time, p.index)


def _priority_key(p: SimulatedProcess) -> tuple:
    return (p.priority, p.arrival_time, p.index)


def _make_slots(processes: Sequence[Process]) -> List[SimulatedProcess]:
    return [SimulatedProcess.from_process(i, p) for i, p in enumerate(processes)]


def _pick_best(slots: List[SimulatedProcess], time: int, key: SelectionKey) -> Optional[SimulatedProcess]:
    ready = [s for s in slots if not s.done and s.arrival_time <= time]
    if not ready:
        return None
    return min(ready, key=key)


def _interval(p: SimulatedProcess, start: int, end: int) -> Interval:
    return Interval(pid=p.pid, start_time=start, end_time=end, color=process_color(p.pid))


def _build_result(
    algorithm: str,
    timeline: Tuple[Interval, ...],
    finished: List[SimulatedProcess],
    quantum: Optional[int] = None,
    preemptive: bool = False,
) -> SimulationResult:
    processes = tuple(p.to_metrics() for p in finished)
    metrics = compute_system_metrics(processes, timeline)
    logger.info(
        f"{algorithm}: {len(processes)} processes finished at t={metrics.total_span}, "
        f"avg wait {metrics.average_waiting_time:.2f}"
    )
    return SimulationResult(
        algorithm=algorithm,
        timeline=timeline,
        processes=processes,
        metrics=metrics,
        quantum=quantum,
        preemptive=preemptive,
    )


def _run_to_completion(slots: List[SimulatedProcess], key: SelectionKey) -> Tuple[Tuple[Interval, ...], List[SimulatedProcess]]:
    """
    Non-preemptive driver: whichever ready process ``key`` ranks best runs to
    completion. When nothing has arrived yet the clock jumps straight to the
    next arrival.
    """
    time = 0
    timeline: List[Interval] = []
    finished: List[SimulatedProcess] = []

    while len(finished) < len(slots):
        p = _pick_best(slots, time, key)
        if p is None:
            time = min(s.arrival_time for s in slots if not s.done)
            logger.debug(f"t={time}: CPU idle until next arrival")
            continue

        start_time = time
        end_time = start_time + p.burst_time
        logger.debug(f"t={start_time}: dispatch {p.pid} until t={end_time}")
        timeline.append(_interval(p, start_time, end_time))

        p.complete(end_time)
        finished.append(p)
        time = end_time

    return tuple(timeline), finished


def _step_ticks(
    slots: List[SimulatedProcess], key: SelectionKey, algorithm: str
) -> Tuple[Tuple[Interval, ...], List[SimulatedProcess]]:
    """
    Preemptive driver: re-select every tick and run the winner for one unit.

    The run is capped at latest arrival + total burst + SAFETY_MARGIN; a valid
    workload always finishes well before that.
    """
    ceiling = max(s.arrival_time for s in slots) + sum(s.burst_time for s in slots) + SAFETY_MARGIN
    builder = IntervalBuilder()
    finished: List[SimulatedProcess] = []
    running: Optional[int] = None
    time = 0

    while len(finished) < len(slots):
        if time >= ceiling:
            unfinished = [s.pid for s in slots if not s.done]
            logger.error(f"{algorithm}: simulation reached t={ceiling} with unfinished processes {unfinished}")
            raise SimulationBoundExceeded(algorithm, ceiling, unfinished)

        p = _pick_best(slots, time, key)
        if p is None:
            running = None
            time += 1
            continue

        if running is not None and running != p.index:
            logger.debug(f"t={time}: {slots[running].pid} preempted by {p.pid}")
        running = p.index

        builder.add_tick(p.pid, time)
        p.remaining_time -= 1
        time += 1

        if p.remaining_time == 0:
            p.complete(time)
            finished.append(p)
            running = None

    return builder.intervals(), finished


def simulate_fcfs(processes: Sequence[Process]) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    validate_processes(processes)
    # sorted() is stable, so simultaneous arrivals keep their input order.
    slots = sorted(_make_slots(processes), key=lambda s: s.arrival_time)

    time = 0
    timeline: List[Interval] = []

    for p in slots:
        start_time = max(time, p.arrival_time)
        end_time = start_time + p.burst_time
        timeline.append(_interval(p, start_time, end_time))
        p.complete(end_time)
        time = end_time

    return _build_result(ALGORITHM_NAMES["fcfs"], tuple(timeline), slots)


def simulate_sjf(processes: Sequence[Process]) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    validate_processes(processes)
    timeline, finished = _run_to_completion(_make_slots(processes), _burst_key)
    return _build_result(ALGORITHM_NAMES["sjf"], timeline, finished)


def simulate_srtf(processes: Sequence[Process]) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    validate_processes(processes)
    name = ALGORITHM_NAMES["srtf"]
    timeline, finished = _step_ticks(_make_slots(processes), _remaining_key, name)
    return _build_result(name, timeline, finished, preemptive=True)


def simulate_rr(processes: Sequence[Process], quantum: Optional[int]) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    After each slice, processes that arrived during it join the ready queue
    before the process that was just running is put back at the tail.
    """
    validate_processes(processes)
    quantum = validate_quantum(quantum)

    slots = _make_slots(processes)
    ready: Deque[int] = deque()
    timeline: List[Interval] = []
    finished: List[SimulatedProcess] = []

    def enqueue_new_arrivals(current_time: int) -> None:
        # Only PENDING slots qualify: queued, running and completed ones are skipped.
        for s in slots:
            if s.state is SlotState.PENDING and s.arrival_time <= current_time:
                s.state = SlotState.QUEUED
                ready.append(s.index)

    time = 0
    enqueue_new_arrivals(time)

    while len(finished) < len(slots):
        if not ready:
            time = min(s.arrival_time for s in slots if s.state is SlotState.PENDING)
            logger.debug(f"t={time}: CPU idle until next arrival")
            enqueue_new_arrivals(time)
            continue

        p = slots[ready.popleft()]
        p.state = SlotState.RUNNING

        run_time = min(quantum, p.remaining_time)
        slice_start = time
        slice_end = time + run_time
        logger.debug(f"t={slice_start}: dispatch {p.pid} for {run_time}")
        timeline.append(_interval(p, slice_start, slice_end))

        time = slice_end
        p.remaining_time -= run_time

        enqueue_new_arrivals(time)

        if p.remaining_time > 0:
            p.state = SlotState.QUEUED
            ready.append(p.index)
        else:
            p.complete(time)
            finished.append(p)

    return _build_result(ALGORITHM_NAMES["rr"], tuple(timeline), finished, quantum=quantum)


def simulate_priority(processes: Sequence[Process], preemptive: bool = False) -> SimulationResult:
    """
    Priority scheduling, preemptive or not.

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then input order.
    """
    validate_processes(processes, require_priority=True)
    slots = _make_slots(processes)

    if preemptive:
        name = ALGORITHM_NAMES["priority-preemptive"]
        timeline, finished = _step_ticks(slots, _priority_key, name)
    else:
        name = ALGORITHM_NAMES["priority"]
        timeline, finished = _run_to_completion(slots, _priority_key)

    return _build_result(name, timeline, finished, preemptive=preemptive)


ALGORITHMS: Dict[str, Callable[..., SimulationResult]] = {
    "fcfs": simulate_fcfs,
    "sjf": simulate_sjf,
    "srtf": simulate_srtf,
    "rr": simulate_rr,
    "priority": simulate_priority,
}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    preemptive: bool = False,
) -> SimulationResult:
    """
    Dispatch to the requested algorithm. ``quantum`` only applies to Round
    Robin and ``preemptive`` only to priority scheduling.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidWorkloadError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    if name == "rr":
        return func(processes, quantum)
    if name == "priority":
        return func(processes, preemptive=preemptive)
    return func(processes)
