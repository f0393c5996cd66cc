from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors raised by the scheduler engine."""


class ClosedError(SchedulerError):
    def __init__(self, message: str = "Scheduler is closed") -> None:
        super().__init__(message)


class StillRunningError(SchedulerError):
    def __init__(self, message: str = "Some processes are still executing") -> None:
        super().__init__(message)


class AlreadyRunningError(SchedulerError):
    def __init__(self, message: str = "Scheduler has already been started") -> None:
        super().__init__(message)


class EmptyReportError(SchedulerError):
    def __init__(self, message: str = "No process has executed yet") -> None:
        super().__init__(message)
