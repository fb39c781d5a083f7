from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_QUANTUM, DEFAULT_STEP_DELAY
from .errors import InvalidWorkloadError, SchedulerError
from .export import render_timeline_image, write_csv
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_results
from .models import Process, SimulationResult
from .replay import running_at, waiting_at
from .validation import validate_processes
from .workload_io import demo_workload, describe_workload, load_workload, random_workload, save_workload

logger = logging.getLogger("schedsim")


def _add_workload_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--demo",
        action="store_true",
        help="Use the built-in four-process demo workload.",
    )
    source.add_argument(
        "--random",
        action="store_true",
        help="Use a randomly generated workload (see --seed).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --random so runs can be reproduced.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Single-CPU scheduling simulator (FCFS, SJF, SRTF, RR, Priority).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch and preemption.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_workload_source(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round robin (default: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--preemptive",
        action="store_true",
        help="Run priority scheduling in preemptive mode.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Replay the schedule tick by tick in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=DEFAULT_STEP_DELAY,
        help=f"Seconds to wait between steps when --step is used (default: {DEFAULT_STEP_DELAY}).",
    )
    run_parser.add_argument(
        "--csv",
        dest="csv_path",
        default=None,
        help="Write a CSV report (processes, metrics, Gantt sequence) to this path.",
    )
    run_parser.add_argument(
        "--png",
        dest="png_path",
        default=None,
        help="Write a Gantt chart image with a metrics legend to this path.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    _add_workload_source(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all). Priority runs in both modes.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    generate_parser = subparsers.add_parser("generate", help="Write a demo or random workload to a JSON file.")
    generate_parser.add_argument(
        "--output",
        "-o",
        required=True,
        help="Destination JSON file.",
    )
    generate_parser.add_argument(
        "--demo",
        action="store_true",
        help="Write the demo workload instead of a random one.",
    )
    generate_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random workload.",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _resolve_workload(args: argparse.Namespace) -> List[Process]:
    if args.demo:
        return demo_workload()
    if args.random:
        return random_workload(seed=args.seed)
    return load_workload(Path(args.workload))


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if console.is_terminal:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
    else:
        # Piped or redirected output gets the plain chart.
        console.print(render_gantt(result.timeline), markup=False, highlight=False)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Complete",
        "Wait",
        "Turnaround",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            "" if p.priority is None else str(p.priority),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    m = result.metrics
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")
    sys_table.add_row("Avg waiting", f"{m.average_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{m.average_turnaround_time:.2f}")
    sys_table.add_row("CPU utilization", f"{m.cpu_utilization:.1f}%")
    sys_table.add_row("Throughput (proc/time)", f"{m.throughput:.3f}")
    sys_table.add_row("Total time", str(m.total_span))
    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Tick-by-tick replay of the computed schedule.
    """
    span = result.metrics.total_span
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {span} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(span):
        running = running_at(result, t)
        waiting = waiting_at(result, t)
        msg = f"t={t:2d}: " + (running or "[dim]idle[/dim]")
        if waiting:
            msg += f"  [dim]waiting: {' '.join(waiting)}[/dim]"
        console.print(msg)
        time.sleep(delay)


def _run_compare(processes: List[Process], algorithms: List[str], quantum: int, console: Console) -> None:
    results = []
    for alg in algorithms:
        if alg == "priority":
            try:
                validate_processes(processes, require_priority=True)
            except InvalidWorkloadError as exc:
                logger.warning(f"Skipping priority scheduling: {exc}")
                continue
            results.append(run_algorithm(alg, processes, preemptive=False))
            results.append(run_algorithm(alg, processes, preemptive=True))
        else:
            results.append(run_algorithm(alg, processes, quantum=quantum if alg == "rr" else None))

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("CPU util.", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for row in summarize_results(results):
        summary_table.add_row(
            row["algorithm"],
            "" if row["quantum"] is None else str(row["quantum"]),
            f"{row['avg_waiting']:.2f}",
            f"{row['avg_turnaround']:.2f}",
            f"{row['cpu_utilization']:.1f}%",
            f"{row['throughput']:.3f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "run" and args.preemptive and args.algorithm != "priority":
        parser.error("--preemptive only applies to --algorithm priority")
    _configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "run":
            processes = _resolve_workload(args)
            console.print(f"[dim]Workload: {escape(describe_workload(processes))}[/dim]")
            quantum = args.quantum
            if args.algorithm == "rr" and quantum is None:
                quantum = DEFAULT_QUANTUM
            result = run_algorithm(args.algorithm, processes, quantum=quantum, preemptive=args.preemptive)
            if args.step:
                try:
                    _animate_result(result, args.step_delay, console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            _print_result(result, console)
            if args.csv_path:
                console.print(f"CSV report written to {write_csv(result, args.csv_path)}")
            if args.png_path:
                console.print(f"Gantt image written to {render_timeline_image(result, args.png_path)}")
            return 0

        if args.command == "compare":
            processes = _resolve_workload(args)
            _run_compare(processes, args.algorithms, args.quantum, console)
            return 0

        if args.command == "generate":
            processes = demo_workload() if args.demo else random_workload(seed=args.seed)
            path = save_workload(processes, args.output)
            console.print(f"Wrote {len(processes)} processes to {path}")
            return 0
    except SchedulerError as exc:
        logger.debug("Simulation failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
