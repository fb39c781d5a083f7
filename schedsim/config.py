"""
Defaults shared by the engine and the command line.
"""

# Round Robin quantum used by the CLI when --quantum is omitted.
DEFAULT_QUANTUM = 2

# Seconds between frames for `schedsim run --step`.
DEFAULT_STEP_DELAY = 0.3

# Extra ticks granted to preemptive simulations beyond latest arrival + total burst.
SAFETY_MARGIN = 100

PALETTE = (
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#84CC16",
    "#F97316",
    "#6366F1",
)

# Terminal counterparts of PALETTE, index for index.
RICH_PALETTE = (
    "blue",
    "red",
    "green",
    "yellow",
    "bright_magenta",
    "magenta",
    "cyan",
    "bright_green",
    "bright_red",
    "bright_blue",
)

ALGORITHM_NAMES = {
    "fcfs": "FCFS",
    "sjf": "SJF (non-preemptive)",
    "srtf": "SRTF",
    "rr": "Round Robin",
    "priority": "Priority (non-preemptive)",
    "priority-preemptive": "Priority (preemptive)",
}
