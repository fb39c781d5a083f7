from pathlib import Path

import pytest

from schedsim.errors import InvalidWorkloadError
from schedsim.workload_io import demo_workload, load_workload, random_workload, save_workload
from schedsim.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority is None
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority is None


def test_load_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,zero,3\n")
    with pytest.raises(InvalidWorkloadError):
        load_workload(p)


def test_load_rejects_invalid_process(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":0}]')
    with pytest.raises(InvalidWorkloadError):
        load_workload(p)


def test_load_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(InvalidWorkloadError):
        load_workload(p)


def test_save_then_load(tmp_path: Path):
    path = save_workload(demo_workload(), tmp_path / "demo.json")
    assert load_workload(path) == demo_workload()


def test_random_workload_ranges():
    procs = random_workload(seed=7)
    assert 3 <= len(procs) <= 7
    assert [p.pid for p in procs] == [f"P{i}" for i in range(1, len(procs) + 1)]
    for p in procs:
        assert 0 <= p.arrival_time <= 9
        assert 1 <= p.burst_time <= 15
        assert 1 <= p.priority <= 5
    assert random_workload(seed=7) == procs
