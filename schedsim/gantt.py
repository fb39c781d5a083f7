from __future__ import annotations

from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .colors import rich_color
from .models import Interval


def render_gantt(intervals: Sequence[Interval]) -> str:
    """
    Plain-text Gantt chart; idle gaps are drawn with dots.
    """
    if not intervals:
        return "(no execution)"

    intervals = sorted(intervals, key=lambda iv: (iv.start_time, iv.end_time))

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for iv in intervals:
        idle_gap = iv.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = iv.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, iv.duration)
        line += "=" * width
        labels += iv.pid[:width].ljust(width)
        last_time = iv.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(intervals: Sequence[Interval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not intervals:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    intervals = sorted(intervals, key=lambda iv: (iv.start_time, iv.end_time))

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for iv in intervals:
        idle_gap = iv.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = iv.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, iv.duration)
        timeline.append(" " * width, style=f"on {rich_color(iv.pid)}")
        labels.append(iv.pid[:width].ljust(width), style="bold")

        last_time = iv.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
