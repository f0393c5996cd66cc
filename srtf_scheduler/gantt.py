from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ProcessStats

# (name, start, end)
Slice = Tuple[str, float, float]


def timeline_slices(processes: List[ProcessStats]) -> List[Slice]:
    """
    Flatten per-process run segments into one chronologically ordered timeline.
    """
    slices = [(p.name, seg.start, seg.end) for p in processes for seg in p.segments]
    return sorted(slices, key=lambda s: (s[1], s[2]))


def format_time(value: float) -> str:
    return f"{value:g}"


def _width(start: float, end: float) -> int:
    return max(1, round(end - start))


def render_gantt(processes: List[ProcessStats]) -> str:
    """
    Plain-text Gantt chart, one character per time unit.
    """
    slices = timeline_slices(processes)
    if not slices:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0.0

    for name, start, end in slices:
        if start > last_time:
            gap = _width(last_time, start)
            line += "." * gap
            labels += " " * gap
            last_time = start
            time_marks += f"{format_time(last_time):>4}"

        width = _width(start, end)
        line += "=" * width
        labels += name[:width].ljust(width)
        last_time = end
        time_marks += f"{format_time(last_time):>4}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(processes: List[ProcessStats]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    slices = timeline_slices(processes)
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    name_to_color: Dict[str, str] = {}

    def name_color(name: str) -> str:
        if name not in name_to_color:
            idx = len(name_to_color) % len(colors)
            name_to_color[name] = colors[idx]
        return name_to_color[name]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0.0

    for name, start, end in slices:
        if start > last_time:
            gap = _width(last_time, start)
            timeline.append(" " * gap)
            labels.append(" " * gap)
            last_time = start
            time_marks += f"{format_time(last_time):>4}"

        width = _width(start, end)
        timeline.append(" " * width, style=f"on {name_color(name)}")
        labels.append(name[:width].ljust(width), style="bold")

        last_time = end
        time_marks += f"{format_time(last_time):>4}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
