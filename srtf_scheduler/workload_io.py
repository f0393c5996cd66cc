from __future__ import annotations

import csv
import json
import math
from pathlib import Path
from typing import List

from .models import Arrival


def load_workload(path: str | Path) -> List[Arrival]:
    """
    Load a workload from a JSON or CSV file into a list of Arrival records,
    sorted by arrival time (file order is kept for equal arrival times).
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        arrivals = _load_json(path)
    elif suffix == ".csv":
        arrivals = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    return sorted(arrivals, key=lambda a: a.arrival_time)


def _load_json(path: Path) -> List[Arrival]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_arrival_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Arrival]:
    arrivals: List[Arrival] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            arrivals.append(_arrival_from_mapping(row))
    return arrivals


def _arrival_from_mapping(mapping) -> Arrival:
    try:
        name = str(mapping["name"])
        burst_time = float(mapping["burst_time"])
        arrival_val = mapping.get("arrival_time")
        arrival_time = float(arrival_val) if arrival_val not in (None, "") else 0.0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    if not (math.isfinite(burst_time) and burst_time > 0):
        raise ValueError(f"Burst time must be a positive finite number: {mapping!r}")
    if not (math.isfinite(arrival_time) and arrival_time >= 0):
        raise ValueError(f"Arrival time must be a finite non-negative number: {mapping!r}")

    return Arrival(name=name, arrival_time=arrival_time, burst_time=burst_time)
