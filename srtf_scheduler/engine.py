from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from .clock import Clock, ClockTimer
from .config import SchedulerConfig
from .errors import AlreadyRunningError, ClosedError, StillRunningError
from .metrics import build_report
from .models import ExecutionEntry, Process, ReadyProcess, RunSegment, SchedulerReport

logger = logging.getLogger(__name__)


class SRTFScheduler:
    """
    Shortest Remaining Time First (preemptive SJF) on a single virtual CPU.

    All state is owned by one asyncio event loop. A run segment ends either
    when its clock deadline fires (completion) or when :meth:`add` preempts
    it. Whichever happens first closes the segment, disarms the other source
    and selects the next process in the same callback, so a clock tick can
    never slip in between two segments and no reader sees a half-applied
    switch. The coroutine returned by :meth:`start` supervises this: it
    awaits the active span, or the wake future while idle, until
    :meth:`close` is called.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None, clock: Optional[Clock] = None) -> None:
        self.config = config or SchedulerConfig()
        self.clock = clock or Clock(period=self.config.tick_period, increment=self.config.tick_increment)

        self.entries: Dict[str, ExecutionEntry] = {}
        self._ready: List[Process] = []

        self.current_process: Optional[Process] = None
        self.current_process_start_time: Optional[float] = None
        self._span: Optional[asyncio.Future] = None
        self._span_timer: Optional[ClockTimer] = None

        self._wake: Optional[asyncio.Future] = None
        self._idle = asyncio.Event()
        self._started = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def started(self) -> bool:
        return self._started

    @property
    def idle(self) -> bool:
        return self.current_process is None and not self._ready

    @property
    def processes(self) -> List[Process]:
        return list(self._ready)

    def select_next(self) -> Optional[Process]:
        """
        Return the ready process with the least remaining time.

        Ties keep the earliest inserted process, since only a strictly smaller
        remaining time displaces the current best.
        """
        best: Optional[Process] = None
        for process in self._ready:
            if best is None or process.remaining_time < best.remaining_time:
                best = process
        return best

    def add(self, process: Process) -> None:
        if self._closed:
            raise ClosedError()
        if process.pid in self.entries:
            raise ValueError(f"Process {process.name} ({process.pid}) was already added")

        now = self.clock.now
        logger.info("Adding %s with %ss burst time at t=%s", process.name, process.burst_time, now)

        self.entries[process.pid] = ExecutionEntry(process=process, entry_time=now)
        self._ready.append(process)
        self._idle.clear()

        current = self.current_process
        if current is not None:
            assert self.current_process_start_time is not None
            # remaining_time is only updated when a segment ends
            current_remaining = current.remaining_time - (now - self.current_process_start_time)
            if process.burst_time < current_remaining:
                logger.info(
                    "Preempting %s (%ss left) for %s (%ss burst)",
                    current.name,
                    current_remaining,
                    process.name,
                    process.burst_time,
                )
                self._preempt()
        elif self._started:
            self._dispatch()

        if self._wake is not None:
            self._resolve_wake()

    async def start(self) -> None:
        """
        Run the scheduler until :meth:`close` is called.
        """
        if self._closed:
            raise ClosedError()
        if self._started:
            raise AlreadyRunningError()
        self._started = True

        self.clock.start()
        try:
            self._dispatch()
            while not self._closed:
                if self._span is not None:
                    await self._span
                else:
                    await self._wait_for_work()
        finally:
            if self._span_timer is not None:
                self._span_timer.cancel()
            self.clock.stop()

    def close(self) -> None:
        if self._closed:
            return
        if not self.idle:
            raise StillRunningError()

        self._closed = True
        self.clock.stop()
        logger.info("Scheduler closed at t=%s", self.clock.now)

        if self._wake is not None:
            self._resolve_wake()

    async def wait_idle(self) -> None:
        """
        Wait until the scheduler has run every ready process and sits idle.
        """
        await self._idle.wait()

    def snapshot(self) -> List[ReadyProcess]:
        rows = []
        for process in self._ready:
            running = process is self.current_process
            remaining = process.remaining_time
            if running:
                assert self.current_process_start_time is not None
                remaining -= self.clock.now - self.current_process_start_time
            rows.append(ReadyProcess(name=process.name, remaining_time=remaining, running=running))
        return rows

    def report(self) -> SchedulerReport:
        return build_report(self.entries.values(), now=self.clock.now)

    async def _wait_for_work(self) -> None:
        self._wake = asyncio.get_running_loop().create_future()
        await self._wake

    def _resolve_wake(self) -> None:
        wake, self._wake = self._wake, None
        if wake is not None and not wake.done():
            wake.set_result(None)

    def _dispatch(self) -> None:
        while True:
            process = self.select_next()
            if process is None:
                logger.info("Scheduler entering idle state at t=%s", self.clock.now)
                self._idle.set()
                return

            if process.remaining_time <= 0:
                self._ready.remove(process)
                continue

            self._execute(process)
            return

    def _execute(self, process: Process) -> None:
        start = self.clock.now
        logger.debug("Executing %s with %ss left at t=%s", process.name, process.remaining_time, start)

        self.current_process = process
        self.current_process_start_time = start
        self._span = asyncio.get_running_loop().create_future()
        self._span_timer = self.clock.call_at(start + process.remaining_time, self._complete)

    def _complete(self) -> None:
        assert self.current_process is not None
        self._end_segment(self.current_process.remaining_time)

    def _preempt(self) -> None:
        assert self.current_process_start_time is not None
        if self._span_timer is not None:
            self._span_timer.cancel()
        self._end_segment(self.clock.now - self.current_process_start_time)

    def _end_segment(self, elapsed: float) -> None:
        process = self.current_process
        start = self.current_process_start_time
        assert process is not None and start is not None

        # A span preempted on the tick it began leaves no segment behind.
        if elapsed > 0:
            self.entries[process.pid].execution_times.append(RunSegment(start=start, end=start + elapsed))
            process.remaining_time = max(process.remaining_time - elapsed, 0)

        if process.remaining_time == 0:
            self._ready.remove(process)
            logger.info("Done executing %s at t=%s", process.name, start + elapsed)

        span = self._span
        self.current_process = None
        self.current_process_start_time = None
        self._span = None
        self._span_timer = None

        if span is not None and not span.done():
            span.set_result(elapsed)

        self._dispatch()
