from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class SchedulerConfig:
    """
    Construction options for the scheduler.

    ``time_slice`` is accepted for compatibility with round-robin style
    configs; SRTF never slices. ``verbose`` only affects logging. The tick
    settings control the simulated clock: every ``tick_period`` real seconds
    the clock advances by ``tick_increment`` time units.
    """

    time_slice: int = 2
    verbose: int = 0
    tick_period: float = 0.5
    tick_increment: float = 0.5

    def __post_init__(self) -> None:
        if self.tick_period <= 0:
            raise ValueError(f"tick_period must be positive (got {self.tick_period})")
        if self.tick_increment <= 0:
            raise ValueError(f"tick_increment must be positive (got {self.tick_increment})")
        if self.verbose < 0:
            raise ValueError(f"verbose must be >= 0 (got {self.verbose})")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "SchedulerConfig":
        """
        Build a config from a dict using either snake_case keys or the legacy
        ``timeSlice`` / ``tickPeriod`` / ``tickIncrement`` spelling.
        """
        aliases = {
            "timeSlice": "time_slice",
            "tickPeriod": "tick_period",
            "tickIncrement": "tick_increment",
        }
        kwargs = {}
        for key, value in mapping.items():
            name = aliases.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown scheduler option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def log_level(self) -> int:
        if self.verbose >= 2:
            return logging.DEBUG
        if self.verbose == 1:
            return logging.INFO
        return logging.WARNING
