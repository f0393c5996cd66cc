import pytest

from srtf_scheduler.errors import EmptyReportError
from srtf_scheduler.metrics import build_report, compute_waiting_time, cpu_busy_time
from srtf_scheduler.models import ExecutionEntry, Process, RunSegment


def _entry(name, burst, entry_time, segments, remaining=0):
    p = Process(name, burst)
    p.remaining_time = remaining
    return ExecutionEntry(
        process=p,
        entry_time=entry_time,
        execution_times=[RunSegment(s, e) for s, e in segments],
    )


def test_waiting_time_sums_gaps():
    segments = [RunSegment(2, 3), RunSegment(5, 8)]
    # (2 - 0) + (5 - 3)
    assert compute_waiting_time(0, segments) == 4


def test_report_per_process_and_averages():
    entries = [
        _entry("P1", 4, 0, [(0, 1), (3, 6)]),
        _entry("P2", 2, 1, [(1, 3)]),
    ]
    report = build_report(entries, now=6)

    p1, p2 = report.processes
    assert p1.waiting_time == 2
    assert p1.service_time == 6
    assert p1.completed
    assert p2.waiting_time == 0
    assert p2.service_time == 2
    assert report.avg_waiting == 1
    assert report.avg_service == 4
    assert cpu_busy_time(report) == 6


def test_unstarted_process_is_pending_not_averaged():
    entries = [
        _entry("P1", 4, 0, [(0, 2)], remaining=2),
        _entry("P2", 3, 1, []),
    ]
    report = build_report(entries, now=2)

    assert [p.name for p in report.processes] == ["P1"]
    assert not report.processes[0].completed
    assert report.pending[0].name == "P2"
    assert report.pending[0].waiting_since == 1
    assert report.avg_waiting == 0
    assert report.avg_service == 4


def test_report_without_segments_raises():
    with pytest.raises(EmptyReportError):
        build_report([_entry("P1", 4, 0, [])], now=0)
    with pytest.raises(EmptyReportError):
        build_report([])
