from collections import defaultdict

import pytest

from schedsim.algorithms import run_algorithm, simulate_fcfs, simulate_rr, simulate_sjf, simulate_srtf
from schedsim.models import Process
from schedsim.workload_io import random_workload

RUNS = [
    ("fcfs", {}),
    ("sjf", {}),
    ("srtf", {}),
    ("rr", {"quantum": 1}),
    ("rr", {"quantum": 3}),
    ("priority", {"preemptive": False}),
    ("priority", {"preemptive": True}),
]


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("name,kwargs", RUNS)
def test_schedule_invariants(name, kwargs, seed):
    procs = random_workload(seed=seed)
    res = run_algorithm(name, procs, **kwargs)
    by_pid = {p.pid: p for p in procs}

    assert sorted(p.pid for p in res.processes) == sorted(by_pid)

    executed = defaultdict(int)
    for iv in res.timeline:
        assert iv.end_time > iv.start_time
        assert iv.start_time >= by_pid[iv.pid].arrival_time
        executed[iv.pid] += iv.duration
    assert dict(executed) == {pid: p.burst_time for pid, p in by_pid.items()}

    for prev, cur in zip(res.timeline, res.timeline[1:]):
        assert prev.end_time <= cur.start_time

    for p in res.processes:
        assert p.turnaround_time == p.completion_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_time
        assert p.waiting_time >= 0

    assert 0 < res.metrics.cpu_utilization <= 100


def test_fcfs_is_deterministic():
    procs = random_workload(seed=42)
    assert simulate_fcfs(procs).timeline == simulate_fcfs(procs).timeline


def test_srtf_matches_sjf_without_preemption():
    procs = [
        Process("A", arrival_time=0, burst_time=3),
        Process("B", arrival_time=1, burst_time=5),
        Process("C", arrival_time=2, burst_time=6),
    ]
    sjf = {p.pid: p.completion_time for p in simulate_sjf(procs).processes}
    srtf = {p.pid: p.completion_time for p in simulate_srtf(procs).processes}
    assert sjf == srtf == {"A": 3, "B": 8, "C": 14}


@pytest.mark.parametrize("quantum", [1, 2, 4])
def test_rr_first_dispatch_fairness(quantum):
    procs = [Process(f"P{i}", arrival_time=0, burst_time=10) for i in range(1, 6)]
    res = simulate_rr(procs, quantum=quantum)
    first_start = {}
    for iv in res.timeline:
        first_start.setdefault(iv.pid, iv.start_time)
    for ahead, p in enumerate(procs):
        assert first_start[p.pid] - first_start["P1"] <= quantum * ahead


def test_full_utilization_without_idle(demo_procs):
    assert simulate_fcfs(demo_procs).metrics.cpu_utilization == 100


def test_idle_lowers_utilization():
    procs = [Process("A", arrival_time=3, burst_time=2)]
    res = simulate_srtf(procs)
    assert res.metrics.cpu_utilization == pytest.approx(40.0)
    assert res.metrics.throughput == pytest.approx(0.2)
