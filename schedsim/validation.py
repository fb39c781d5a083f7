from __future__ import annotations

from typing import Optional, Sequence

from .errors import InvalidWorkloadError
from .models import Process


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process], require_priority: bool = False) -> None:
    """
    Reject a process list the simulators cannot run.

    Raises InvalidWorkloadError naming every problem found.
    """
    if not processes:
        raise InvalidWorkloadError("At least one process is required")

    errors = []
    seen: set[str] = set()
    for p in processes:
        if not p.pid:
            errors.append("Process ID is required")
        elif p.pid in seen:
            errors.append(f"Process ID {p.pid!r} must be unique")
        seen.add(p.pid)

        if not _is_int(p.arrival_time):
            errors.append(f"{p.pid}: arrival time must be an integer, got {p.arrival_time!r}")
        elif p.arrival_time < 0:
            errors.append(f"{p.pid}: arrival time cannot be negative")

        if not _is_int(p.burst_time):
            errors.append(f"{p.pid}: burst time must be an integer, got {p.burst_time!r}")
        elif p.burst_time <= 0:
            errors.append(f"{p.pid}: burst time must be greater than 0")

        if p.priority is not None and not _is_int(p.priority):
            errors.append(f"{p.pid}: priority must be an integer, got {p.priority!r}")
        elif require_priority and (p.priority is None or p.priority <= 0):
            errors.append(f"{p.pid}: priority must be a positive integer for priority scheduling")

    if errors:
        raise InvalidWorkloadError("; ".join(errors))


def validate_quantum(quantum: Optional[int]) -> int:
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidWorkloadError("Round Robin requires a positive integer quantum (use --quantum)")
    return quantum
