"""
Exception hierarchy raised by the simulator.

Every failure is raised before or instead of a result; callers never receive a
partially populated SimulationResult.
"""

from __future__ import annotations

from typing import Sequence


class SchedulerError(Exception):
    """Base class for all simulator errors."""


class InvalidWorkloadError(SchedulerError, ValueError):
    """The process set or algorithm parameters violate a precondition."""


class SimulationBoundExceeded(SchedulerError, RuntimeError):
    """A tick-driven simulation reached its time ceiling with work left over."""

    def __init__(self, algorithm: str, ceiling: int, unfinished: Sequence[str]):
        self.algorithm = algorithm
        self.ceiling = ceiling
        self.unfinished = tuple(unfinished)
        super().__init__(
            f"{algorithm} did not finish by t={ceiling}; "
            f"unfinished: {', '.join(self.unfinished)}"
        )


class MetricsError(SchedulerError, ArithmeticError):
    """Aggregate metrics are undefined for the given timeline."""
