from __future__ import annotations

import csv
import json
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .errors import InvalidWorkloadError
from .models import Process
from .validation import validate_processes


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidWorkloadError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    validate_processes(processes)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidWorkloadError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidWorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else None
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise InvalidWorkloadError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def save_workload(processes: Iterable[Process], path: str | Path) -> Path:
    path = Path(path)
    entries = []
    for p in processes:
        entry = {"pid": p.pid, "arrival_time": p.arrival_time, "burst_time": p.burst_time}
        if p.priority is not None:
            entry["priority"] = p.priority
        entries.append(entry)
    path.write_text(json.dumps(entries, indent=2) + "\n", encoding="utf-8")
    return path


def demo_workload() -> List[Process]:
    """
    The classic four-process textbook workload.
    """
    return [
        Process("P1", arrival_time=0, burst_time=8, priority=3),
        Process("P2", arrival_time=1, burst_time=4, priority=1),
        Process("P3", arrival_time=2, burst_time=9, priority=4),
        Process("P4", arrival_time=3, burst_time=5, priority=2),
    ]


def random_workload(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Process]:
    """
    3 to 7 processes with arrival 0-9, burst 1-15 and priority 1-5.
    """
    rng = rng or random.Random(seed)
    count = rng.randint(3, 7)
    return [
        Process(
            f"P{i}",
            arrival_time=rng.randint(0, 9),
            burst_time=rng.randint(1, 15),
            priority=rng.randint(1, 5),
        )
        for i in range(1, count + 1)
    ]


def describe_workload(processes: Sequence[Process]) -> str:
    return ", ".join(
        f"{p.pid}(a={p.arrival_time}, b={p.burst_time}"
        + ("" if p.priority is None else f", p={p.priority}")
        + ")"
        for p in processes
    )
