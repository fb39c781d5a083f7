from __future__ import annotations

from typing import List, Optional, Tuple

from .colors import process_color
from .models import Interval


class IntervalBuilder:
    """
    Folds a stream of executed ticks into Gantt intervals.

    A tick extends the open interval when it belongs to the same process and
    starts exactly where the open interval ends; anything else closes the open
    interval and starts a new one.
    """

    def __init__(self) -> None:
        self._closed: List[Interval] = []
        self._open: Optional[Tuple[str, int, int]] = None

    def add_tick(self, pid: str, start: int, length: int = 1) -> None:
        end = start + length
        if self._open is not None:
            open_pid, open_start, open_end = self._open
            if open_pid == pid and open_end == start:
                self._open = (pid, open_start, end)
                return
            self._flush()
        self._open = (pid, start, end)

    def _flush(self) -> None:
        if self._open is None:
            return
        pid, start, end = self._open
        self._closed.append(Interval(pid=pid, start_time=start, end_time=end, color=process_color(pid)))
        self._open = None

    def intervals(self) -> Tuple[Interval, ...]:
        self._flush()
        return tuple(self._closed)
