from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment


def time_marks(segments: List[TimelineSegment], origin: int = 1) -> str:
    """
    Line of segment end times, each right-aligned under the last cell of its segment.

    ``origin`` is the column of the first time unit in the chart above. A mark
    that would run into the previous one is dropped.
    """
    marks = " " * (origin - 1) + "0"
    for seg in segments:
        text = str(seg.end)
        pad = origin + seg.end - len(marks) - len(text)
        if pad < 1:
            continue
        marks += " " * pad + text
    return marks


def render_gantt(segments: List[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Idle units are dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = " "

    for seg in segments:
        fill = "." if seg.is_idle else "="
        line += fill * seg.duration
        label = "" if seg.is_idle else seg.occupant
        labels += label[: seg.duration].ljust(seg.duration)

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks(segments, origin=1),
        ]
    )


def build_rich_gantt(segments: List[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()

    for seg in segments:
        if seg.is_idle:
            timeline.append("·" * seg.duration, style="dim")
            labels.append(" " * seg.duration)
        else:
            timeline.append(" " * seg.duration, style=f"on {pid_color(seg.occupant)}")
            labels.append(seg.occupant[: seg.duration].ljust(seg.duration), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    # Panel border plus one column of padding sit left of the first cell.
    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks(segments, origin=2)
