from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from .clock import Clock
from .config import SchedulerConfig
from .engine import SRTFScheduler
from .models import Arrival, Process, SchedulerReport

logger = logging.getLogger(__name__)


async def replay_arrivals(scheduler: SRTFScheduler, arrivals: Iterable[Arrival]) -> None:
    """
    Add each arrival to the scheduler once the clock reaches its arrival time.
    """
    for arrival in sorted(arrivals, key=lambda a: a.arrival_time):
        await scheduler.clock.wait_until(arrival.arrival_time)
        scheduler.add(Process(name=arrival.name, burst_time=arrival.burst_time))


async def run_workload(scheduler: SRTFScheduler, arrivals: Iterable[Arrival]) -> SchedulerReport:
    """
    Start ``scheduler``, feed it ``arrivals`` and close it once every process
    has finished. Returns the final statistics.
    """
    runner = asyncio.create_task(scheduler.start())
    try:
        await replay_arrivals(scheduler, arrivals)
        await scheduler.wait_idle()
        scheduler.close()
        await runner
    finally:
        if not runner.done():
            runner.cancel()
    logger.debug("Workload finished at t=%s", scheduler.clock.now)
    return scheduler.report()


def simulate(
    arrivals: Iterable[Arrival],
    config: Optional[SchedulerConfig] = None,
    clock: Optional[Clock] = None,
) -> SchedulerReport:
    scheduler = SRTFScheduler(config=config, clock=clock)
    return asyncio.run(run_workload(scheduler, list(arrivals)))
