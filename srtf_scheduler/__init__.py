"""
SRTF scheduler package.

Simulates preemptive Shortest-Remaining-Time-First scheduling of logical
processes on a single virtual processor, driven by a ticking simulated clock.
"""

from .config import SchedulerConfig
from .engine import SRTFScheduler
from .errors import (
    AlreadyRunningError,
    ClosedError,
    EmptyReportError,
    SchedulerError,
    StillRunningError,
)
from .models import Process

__all__ = [
    "AlreadyRunningError",
    "ClosedError",
    "EmptyReportError",
    "Process",
    "SRTFScheduler",
    "SchedulerConfig",
    "SchedulerError",
    "StillRunningError",
    "cli",
]
