from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ClockTimer:
    """
    Handle for a callback registered with :meth:`Clock.call_at`.
    """

    __slots__ = ("when", "_callback", "_cancelled")

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self._callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _run(self) -> None:
        if not self._cancelled:
            self._cancelled = True
            self._callback()


class Clock:
    """
    Simulated time source.

    Time only moves through :meth:`tick`, which the background ticker calls
    every ``period`` real seconds once :meth:`start` is called. Timers
    registered with :meth:`call_at` fire on the first tick whose time reaches
    their deadline, in deadline order and then registration order.
    """

    def __init__(self, period: float = 0.5, increment: float = 0.5) -> None:
        if period <= 0 or increment <= 0:
            raise ValueError("Clock period and increment must be positive")
        self.period = period
        self.increment = increment
        self._ticks = 0
        self._timers: List[Tuple[float, int, ClockTimer]] = []
        self._seq = itertools.count()
        self._handle: Optional[asyncio.TimerHandle] = None
        self._active = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._origin = 0.0

    @property
    def now(self) -> float:
        return self._ticks * self.increment

    @property
    def running(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self._loop = asyncio.get_running_loop()
        self._origin = self._loop.time() - self._ticks * self.period
        self._schedule_next()
        logger.debug("Clock started at t=%s", self.now)

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Clock stopped at t=%s", self.now)

    def tick(self) -> None:
        self._ticks += 1
        now = self.now
        while self._timers and self._timers[0][0] <= now:
            _, _, timer = heapq.heappop(self._timers)
            timer._run()

    def call_at(self, when: float, callback: Callable[[], None]) -> ClockTimer:
        timer = ClockTimer(when, callback)
        if when <= self.now:
            timer._run()
        else:
            heapq.heappush(self._timers, (when, next(self._seq), timer))
        return timer

    async def wait_until(self, when: float) -> None:
        if when <= self.now:
            return
        future = asyncio.get_running_loop().create_future()

        def wake() -> None:
            if not future.done():
                future.set_result(None)

        timer = self.call_at(when, wake)
        try:
            await future
        finally:
            timer.cancel()

    def _on_tick(self) -> None:
        self._handle = None
        self.tick()
        if self._active:
            self._schedule_next()

    def _schedule_next(self) -> None:
        # Scheduled against the start origin so late ticks do not accumulate.
        assert self._loop is not None
        deadline = self._origin + (self._ticks + 1) * self.period
        self._handle = self._loop.call_at(deadline, self._on_tick)
