"""
schedsim package.

Single-CPU process scheduling simulator: FCFS, SJF, SRTF, Round Robin and
Priority scheduling with timeline, per-process and aggregate metrics, plus a
command-line interface for running and comparing them.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    simulate_fcfs,
    simulate_priority,
    simulate_rr,
    simulate_sjf,
    simulate_srtf,
)
from .errors import InvalidWorkloadError, MetricsError, SchedulerError, SimulationBoundExceeded
from .models import Interval, Process, ProcessMetrics, SimulationResult, SystemMetrics

__all__ = [
    "ALGORITHMS",
    "Interval",
    "InvalidWorkloadError",
    "MetricsError",
    "Process",
    "ProcessMetrics",
    "SchedulerError",
    "SimulationBoundExceeded",
    "SimulationResult",
    "SystemMetrics",
    "run_algorithm",
    "simulate_fcfs",
    "simulate_priority",
    "simulate_rr",
    "simulate_sjf",
    "simulate_srtf",
]
