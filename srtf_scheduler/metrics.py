from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import EmptyReportError
from .models import ExecutionEntry, PendingProcess, ProcessStats, RunSegment, SchedulerReport


def compute_waiting_time(entry_time: float, segments: List[RunSegment]) -> float:
    """
    Time spent ready but not running: the gap from arrival to the first
    segment plus every gap between consecutive segments.
    """
    waiting = 0.0
    previous_end = entry_time
    for segment in segments:
        waiting += segment.start - previous_end
        previous_end = segment.end
    return waiting


def build_report(entries: Iterable[ExecutionEntry], now: Optional[float] = None) -> SchedulerReport:
    """
    Compute per-process wait and service times plus their averages.

    Processes that never ran are listed under ``pending`` and left out of the
    averages, as they have no service time yet.
    """
    report = SchedulerReport(generated_at=now)

    for entry in entries:
        process = entry.process
        segments = list(entry.execution_times)

        if not segments:
            waiting_since = (now - entry.entry_time) if now is not None else 0.0
            report.pending.append(
                PendingProcess(
                    pid=process.pid,
                    name=process.name,
                    burst_time=process.burst_time,
                    entry_time=entry.entry_time,
                    waiting_since=waiting_since,
                )
            )
            continue

        waiting_time = compute_waiting_time(entry.entry_time, segments)
        report.processes.append(
            ProcessStats(
                pid=process.pid,
                name=process.name,
                burst_time=process.burst_time,
                entry_time=entry.entry_time,
                segments=segments,
                waiting_time=waiting_time,
                service_time=waiting_time + process.burst_time,
                completed=process.remaining_time == 0,
            )
        )

    if not report.processes:
        raise EmptyReportError()

    n = len(report.processes)
    report.avg_waiting = sum(p.waiting_time for p in report.processes) / n
    report.avg_service = sum(p.service_time for p in report.processes) / n
    return report


def cpu_busy_time(report: SchedulerReport) -> float:
    return sum(seg.duration for p in report.processes for seg in p.segments)
