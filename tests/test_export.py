from pathlib import Path

from schedsim.algorithms import simulate_fcfs, simulate_rr
from schedsim.export import render_timeline_image, result_to_csv, write_csv
from schedsim.models import Process


def test_csv_blocks(demo_procs):
    text = result_to_csv(simulate_fcfs(demo_procs))
    lines = text.splitlines()
    assert lines[0] == (
        "Process ID,Arrival Time,Burst Time,Priority,Completion Time,Waiting Time,Turnaround Time"
    )
    assert lines[1] == "P1,0,8,3,8,0.00,8.00"
    assert "PERFORMANCE METRICS" in lines
    assert "Algorithm,FCFS" in lines
    assert "Average Waiting Time,8.75" in lines
    assert "CPU Utilization,100.00%" in lines
    assert "Throughput,0.1538 processes/unit" in lines
    seq = lines.index("GANTT CHART SEQUENCE")
    assert lines[seq + 1] == "Process ID,Start Time,End Time,Duration"
    assert lines[seq + 2:] == ["P1,0,8,8", "P2,8,12,4", "P3,12,21,9", "P4,21,26,5"]


def test_csv_missing_priority_and_quantum():
    res = simulate_rr([Process("A", 0, 3)], quantum=2)
    lines = result_to_csv(res).splitlines()
    assert lines[1].startswith("A,0,3,N/A,")
    assert "Time Quantum,2" in lines


def test_write_csv(tmp_path: Path, demo_procs):
    path = write_csv(simulate_fcfs(demo_procs), tmp_path / "out.csv")
    assert path.read_text(encoding="utf-8").startswith("Process ID,")


def test_render_png(tmp_path: Path, demo_procs):
    path = render_timeline_image(simulate_rr(demo_procs, 2), tmp_path / "gantt.png")
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
