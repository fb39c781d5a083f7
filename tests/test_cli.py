from pathlib import Path

import pytest

from schedsim.cli import main
from schedsim.gantt import render_gantt
from schedsim.algorithms import simulate_sjf
from schedsim.models import Process
from schedsim.workload_io import demo_workload, load_workload


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep rich tables on one line per row so assertions can match cell text.
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


def test_run_demo(capsys):
    assert main(["run", "-a", "fcfs", "--demo"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "8.75" in out
    # Captured output is not a terminal, so the plain chart is printed.
    assert "|" + "=" * 26 + "|" in out


def test_run_with_exports(tmp_path: Path):
    csv_path = tmp_path / "r.csv"
    png_path = tmp_path / "r.png"
    code = main(["run", "-a", "priority", "--preemptive", "--demo", "--csv", str(csv_path), "--png", str(png_path)])
    assert code == 0
    assert "Priority (preemptive)" in csv_path.read_text(encoding="utf-8")
    assert png_path.exists()


def test_run_step_replay(capsys):
    assert main(["run", "-a", "srtf", "--demo", "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 1: P2" in out


def test_run_rejects_bad_quantum(capsys):
    assert main(["run", "-a", "rr", "--demo", "-q", "0"]) == 2
    assert "positive integer quantum" in capsys.readouterr().out


def test_run_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    assert main(["run", "-a", "sjf", "-w", str(p)]) == 0


def test_compare_skips_priority_without_priorities(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,3\nB,1,2\n")
    assert main(["compare", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "Priority (preemptive)" not in out


def test_compare_random(capsys):
    assert main(["compare", "--random", "--seed", "3", "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "SRTF" in out
    assert "Priority (preemptive)" in out


def test_generate(tmp_path: Path):
    out = tmp_path / "demo.json"
    assert main(["generate", "--demo", "-o", str(out)]) == 0
    assert load_workload(out) == demo_workload()


def test_plain_gantt():
    res = simulate_sjf([Process("A", 0, 2), Process("B", 4, 3)])
    assert render_gantt(res.timeline).splitlines() == [
        "Gantt Chart:",
        "|==..===|",
        " A   B  ",
        "0  2  4  7",
    ]


def test_preemptive_flag_requires_priority(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["run", "-a", "sjf", "--demo", "--preemptive"])
    assert excinfo.value.code == 2
    assert "--preemptive only applies" in capsys.readouterr().err


def test_compare_skips_priority_with_zero_priority(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,0\nB,1,2,1\n")
    assert main(["compare", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "SRTF" in out
    assert "Priority (non-preemptive)" not in out
