from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .algorithms import simulate
from .config import configure_logging, max_time_from_env
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import IDLE, Algorithm, SimulationResult
from .timeline import expand
from .workload_io import load_workload

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = ["fcfs", "sjf", "srtf"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description="CPU scheduling simulator (FCFS, non-preemptive SJF, SRTF).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions at debug level.",
    )

    # Shared by every sub-command.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    common.add_argument(
        "--max-time",
        type=int,
        default=None,
        help="Largest accepted arrival/burst value (default: $SCHEDULER_SIM_MAX_TIME or 500).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Run a scheduling algorithm on a workload file."
    )
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, srtf).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a simple time-stepped simulation in the terminal.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        parents=[common],
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=ALGORITHM_CHOICES,
        help="Algorithms to compare (default: fcfs sjf srtf).",
    )

    subparsers.add_parser(
        "validate",
        parents=[common],
        help="Check a workload file without running a simulation.",
    )

    return parser


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Complete", "Turnaround", "Wait"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for r in result.sorted_results():
        proc_table.add_row(
            r.pid,
            str(r.arrival),
            str(r.burst),
            str(r.completion),
            str(r.turnaround),
            str(r.waiting),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.results)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Time-stepped textual replay of the compressed timeline.
    """
    trace = expand(result.timeline)
    if not trace:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Simulating {result.algorithm.label}[/bold] (duration {len(trace)} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    run_length = 0
    previous: Optional[str] = None
    for t, occupant in enumerate(trace):
        run_length = run_length + 1 if occupant == previous else 1
        previous = occupant
        if occupant == IDLE:
            console.print(f"t={t:2d}: [dim]\\[idle][/dim]")
        else:
            console.print(f"t={t:2d}: {occupant} [green]{'█' * run_length}[/green]")
        time.sleep(delay)


def _compare(algorithms: List[Algorithm], args: argparse.Namespace, max_time: int, console: Console) -> None:
    processes = load_workload(Path(args.workload), max_time=max_time)

    summary_table = Table(title=f"Algorithm comparison: {args.workload}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for alg in algorithms:
        result = simulate(alg, processes)
        summary = summarize_process_metrics(result.results)
        summary_table.add_row(
            result.algorithm.label,
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            str(result.system.makespan if result.system else 0),
        )

    console.print(summary_table)


def _dispatch(args: argparse.Namespace, console: Console) -> int:
    max_time = args.max_time if args.max_time is not None else max_time_from_env()

    if args.command == "run":
        algorithm = Algorithm.parse(args.algorithm)
        processes = load_workload(Path(args.workload), max_time=max_time)
        result = simulate(algorithm, processes)
        if args.step:
            try:
                _animate_result(result, delay=args.step_delay, console=console)
            except KeyboardInterrupt:
                console.print("[yellow]Animation skipped.[/yellow]")
        _print_result(result, console)
        return 0

    if args.command == "compare":
        algorithms = [Algorithm.parse(a) for a in args.algorithms]
        _compare(algorithms, args, max_time, console)
        return 0

    if args.command == "validate":
        processes = load_workload(Path(args.workload), max_time=max_time)
        console.print(f"[green]OK:[/green] {len(processes)} processes, times <= {max_time}")
        return 0

    raise SchedulerError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_time is not None and args.max_time < 1:
        parser.error(f"--max-time must be a positive integer, got {args.max_time}")

    configure_logging(args.verbose)
    console = console or Console()

    try:
        return _dispatch(args, console)
    except (SchedulerError, OSError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
