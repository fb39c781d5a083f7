from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import MetricsError
from .models import Interval, ProcessMetrics, SimulationResult, SystemMetrics


def compute_system_metrics(processes: Sequence[ProcessMetrics], timeline: Sequence[Interval]) -> SystemMetrics:
    """
    Derive the aggregate metrics from completed processes and their timeline.

    The span runs from time 0 to the last interval end, so idle time before the
    first arrival counts against utilization.
    """
    if not processes or not timeline:
        raise MetricsError("Cannot compute metrics for an empty schedule")

    total_span = max(iv.end_time for iv in timeline)
    if total_span <= 0:
        raise MetricsError(f"Total span must be positive, got {total_span}")

    n = len(processes)
    cpu_busy_time = sum(p.burst_time for p in processes)

    return SystemMetrics(
        average_waiting_time=sum(p.waiting_time for p in processes) / n,
        average_turnaround_time=sum(p.turnaround_time for p in processes) / n,
        cpu_utilization=cpu_busy_time / total_span * 100,
        throughput=n / total_span,
        total_span=total_span,
        cpu_busy_time=cpu_busy_time,
    )


def summarize_results(results: Iterable[SimulationResult]) -> List[dict]:
    """
    One row per result for side-by-side comparison.
    """
    rows = []
    for result in results:
        m = result.metrics
        rows.append(
            {
                "algorithm": result.algorithm,
                "quantum": result.quantum,
                "avg_waiting": m.average_waiting_time,
                "avg_turnaround": m.average_turnaround_time,
                "cpu_utilization": m.cpu_utilization,
                "throughput": m.throughput,
            }
        )
    return rows
