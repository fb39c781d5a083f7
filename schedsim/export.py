"""
File exports of a finished simulation: a CSV report and a PNG timeline.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.patches as mpatches  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402

from .models import SimulationResult  # noqa: E402

logger = logging.getLogger(__name__)

PROCESS_HEADERS = [
    "Process ID",
    "Arrival Time",
    "Burst Time",
    "Priority",
    "Completion Time",
    "Waiting Time",
    "Turnaround Time",
]


def metrics_lines(result: SimulationResult) -> list[str]:
    m = result.metrics
    return [
        f"Average Waiting Time: {m.average_waiting_time:.2f}",
        f"Average Turnaround Time: {m.average_turnaround_time:.2f}",
        f"CPU Utilization: {m.cpu_utilization:.2f}%",
        f"Throughput: {m.throughput:.4f} processes/unit",
    ]


def result_to_csv(result: SimulationResult) -> str:
    """
    Three blocks: one row per process, the performance metrics, then the
    Gantt chart sequence.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow(PROCESS_HEADERS)
    for p in result.processes:
        writer.writerow(
            [
                p.pid,
                p.arrival_time,
                p.burst_time,
                "N/A" if p.priority is None else p.priority,
                p.completion_time,
                f"{p.waiting_time:.2f}",
                f"{p.turnaround_time:.2f}",
            ]
        )

    m = result.metrics
    writer.writerow([])
    writer.writerow(["PERFORMANCE METRICS"])
    writer.writerow(["Algorithm", result.algorithm])
    if result.quantum is not None:
        writer.writerow(["Time Quantum", result.quantum])
    writer.writerow(["Average Waiting Time", f"{m.average_waiting_time:.2f}"])
    writer.writerow(["Average Turnaround Time", f"{m.average_turnaround_time:.2f}"])
    writer.writerow(["CPU Utilization", f"{m.cpu_utilization:.2f}%"])
    writer.writerow(["Throughput", f"{m.throughput:.4f} processes/unit"])

    writer.writerow([])
    writer.writerow(["GANTT CHART SEQUENCE"])
    writer.writerow(["Process ID", "Start Time", "End Time", "Duration"])
    for iv in result.timeline:
        writer.writerow([iv.pid, iv.start_time, iv.end_time, iv.duration])

    return buf.getvalue()


def write_csv(result: SimulationResult, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(result_to_csv(result), encoding="utf-8")
    logger.info(f"Wrote CSV report to {path}")
    return path


def render_timeline_image(result: SimulationResult, path: str | Path, dpi: int = 100) -> Path:
    """
    Draw the timeline as a single-row Gantt chart with the metrics listed
    underneath, and save it as an image (format taken from the suffix).
    """
    path = Path(path)
    span = result.metrics.total_span

    fig, ax = plt.subplots(figsize=(max(8, min(24, span * 0.5)), 3.5))
    try:
        for iv in result.timeline:
            ax.barh(0, iv.duration, left=iv.start_time, height=0.6, color=iv.color, edgecolor="black", linewidth=0.5)
            ax.text(
                iv.start_time + iv.duration / 2,
                0,
                iv.pid,
                ha="center",
                va="center",
                fontsize=9,
                fontweight="bold",
                color="white",
            )

        ax.set_xlim(0, span)
        ax.set_ylim(-0.5, 0.5)
        ax.set_yticks([])
        ax.set_xticks(sorted({0} | {iv.start_time for iv in result.timeline} | {iv.end_time for iv in result.timeline}))
        ax.set_xlabel("Time", fontsize=11)
        ax.set_title(f"Gantt Chart - {result.algorithm}", fontsize=13, fontweight="bold")
        ax.grid(axis="x", alpha=0.3)

        legend_colors = {}
        for iv in result.timeline:
            legend_colors.setdefault(iv.pid, iv.color)
        handles = [mpatches.Patch(color=c, label=pid) for pid, c in legend_colors.items()]
        ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.0, 1.0), fontsize=8)

        fig.text(0.01, 0.02, "    ".join(metrics_lines(result)), fontsize=9, family="monospace")
        fig.tight_layout(rect=(0, 0.08, 1, 1))
        fig.savefig(path, dpi=dpi)
    finally:
        plt.close(fig)

    logger.info(f"Wrote timeline image to {path}")
    return path
