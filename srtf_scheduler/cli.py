from __future__ import annotations

import argparse
import asyncio
import logging
import threading
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import SchedulerConfig
from .engine import SRTFScheduler
from .errors import EmptyReportError, SchedulerError
from .gantt import build_rich_gantt, format_time
from .metrics import cpu_busy_time
from .models import Arrival, Process, SchedulerReport
from .simulation import replay_arrivals, run_workload
from .workload_io import load_workload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="srtf-scheduler",
        description="Real-time Shortest Remaining Time First scheduling simulator.",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--tick-period",
        type=float,
        default=0.5,
        help="Real seconds between clock ticks (default: 0.5).",
    )
    common.add_argument(
        "--tick-increment",
        type=float,
        default=0.5,
        help="Simulated time units added per tick (default: 0.5).",
    )
    common.add_argument(
        "--time-slice",
        type=int,
        default=2,
        help="Accepted for compatibility; SRTF does not slice (default: 2).",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log scheduler events (-v for arrivals/completions, -vv for every segment).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        parents=[common],
        help="Replay a workload file in real time and print the statistics.",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )

    interactive_parser = subparsers.add_parser(
        "interactive",
        parents=[common],
        help="Start the scheduler and add processes from a command prompt.",
    )
    interactive_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Optional workload file replayed in the background.",
    )

    return parser


def config_from_args(args: argparse.Namespace) -> SchedulerConfig:
    return SchedulerConfig(
        time_slice=args.time_slice,
        verbose=args.verbose,
        tick_period=args.tick_period,
        tick_increment=args.tick_increment,
    )


def configure_logging(config: SchedulerConfig, console: Console) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_report(report: SchedulerReport, console: Console) -> None:
    panel, time_marks = build_rich_gantt(report.processes)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["Process", "Burst", "Arrived", "Execution times", "Wait", "Service", "Done"]

    proc_table = Table(title="Processes stat", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "left" if h in {"Process", "Execution times"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in report.processes:
        proc_table.add_row(
            p.name,
            format_time(p.burst_time),
            format_time(p.entry_time),
            ", ".join(f"{format_time(s.start)}-{format_time(s.end)}" for s in p.segments),
            f"{format_time(p.waiting_time)}s",
            f"{format_time(p.service_time)}s",
            "yes" if p.completed else "no",
        )

    console.print(proc_table)

    if report.pending:
        pending_table = Table(title="Not yet started", box=box.SIMPLE_HEAVY)
        pending_table.add_column("Process")
        pending_table.add_column("Burst", justify="right")
        pending_table.add_column("Arrived", justify="right")
        pending_table.add_column("Waiting", justify="right")
        for p in report.pending:
            pending_table.add_row(p.name, format_time(p.burst_time), format_time(p.entry_time), f"{format_time(p.waiting_since)}s")
        console.print(pending_table)

    console.print()

    sys_table = Table(title="Averages", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")
    sys_table.add_row("Avg waiting", f"{report.avg_waiting:.2f}s")
    sys_table.add_row("Avg service", f"{report.avg_service:.2f}s")
    sys_table.add_row("CPU busy time", f"{format_time(cpu_busy_time(report))}s")
    console.print(sys_table)


def _print_processes(scheduler: SRTFScheduler, console: Console) -> None:
    rows = scheduler.snapshot()
    if not rows:
        console.print("[dim]No process waiting.[/dim]")
        return
    for row in rows:
        marker = " [green](running)[/green]" if row.running else ""
        console.print(f"Process [bold]{row.name}[/bold] remains {format_time(row.remaining_time)}s{marker}")


def _read_line(console: Console, prompt: str) -> asyncio.Future:
    """
    Read one line of console input on a daemon thread, so a pending prompt
    never holds up interpreter shutdown.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def settle(line: str | None, exc: BaseException | None) -> None:
        if future.done():
            return
        if exc is not None:
            future.set_exception(exc)
        else:
            future.set_result(line)

    def reader() -> None:
        try:
            line = console.input(prompt)
        except EOFError as exc:
            result = (None, exc)
        else:
            result = (line, None)
        if not loop.is_closed():
            loop.call_soon_threadsafe(settle, *result)

    threading.Thread(target=reader, daemon=True).start()
    return future


def _parse_add(parts: List[str]) -> Process:
    if len(parts) != 3:
        raise ValueError("Usage: add NAME BURST")
    try:
        burst = float(parts[2])
    except ValueError as exc:
        raise ValueError(f"Invalid burst time: {parts[2]!r}") from exc
    return Process(name=parts[1], burst_time=burst)


async def _interactive(config: SchedulerConfig, arrivals: List[Arrival], console: Console) -> None:
    scheduler = SRTFScheduler(config=config)
    runner = asyncio.create_task(scheduler.start())
    feeder = asyncio.create_task(replay_arrivals(scheduler, arrivals)) if arrivals else None
    console.print("[bold cyan]SRTF scheduler[/bold cyan] [dim](add NAME BURST | processes | stat | clear | close | quit)[/dim]")
    try:
        while True:
            try:
                line = await _read_line(console, "[bold]> [/bold]")
            except EOFError:
                return

            parts = line.strip().split()
            if not parts:
                continue

            command = parts[0].lower()
            try:
                if command == "add":
                    scheduler.add(_parse_add(parts))
                elif command == "processes":
                    _print_processes(scheduler, console)
                elif command == "stat":
                    _print_report(scheduler.report(), console)
                elif command == "clear":
                    console.clear()
                elif command == "close":
                    scheduler.close()
                    await runner
                    return
                elif command in {"quit", "exit"}:
                    return
                else:
                    console.print("[red]Invalid command[/red]")
            except EmptyReportError as exc:
                console.print(f"[yellow]{exc}[/yellow]")
            except (SchedulerError, ValueError) as exc:
                console.print(f"[red]Error: {exc}[/red]")
    finally:
        for task in (feeder, runner):
            if task is not None and not task.done():
                task.cancel()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()

    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
        return 2

    configure_logging(config, console)

    arrivals: List[Arrival] = []
    if args.workload:
        arrivals = load_workload(Path(args.workload))

    if args.command == "run":
        scheduler = SRTFScheduler(config=config)
        try:
            report = asyncio.run(run_workload(scheduler, arrivals))
        except EmptyReportError as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            return 1
        _print_report(report, console)
        return 0

    if args.command == "interactive":
        try:
            asyncio.run(_interactive(config, arrivals, console))
        except KeyboardInterrupt:
            console.print("[yellow]Interrupted.[/yellow]")
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
