from __future__ import annotations

from typing import Iterable, List

from .models import TimelineSegment


def compress(trace: Iterable[str]) -> List[TimelineSegment]:
    """
    Collapse a unit-by-unit trace into run-length segments.

    Consecutive units with the same occupant become one segment, so the
    durations always sum to the trace length and no two neighbours share
    an occupant.
    """
    segments: List[TimelineSegment] = []
    time = 0
    for occupant in trace:
        if segments and segments[-1].occupant == occupant:
            segments[-1].duration += 1
        else:
            segments.append(TimelineSegment(occupant=occupant, duration=1, start=time))
        time += 1
    return segments


def expand(segments: Iterable[TimelineSegment]) -> List[str]:
    trace: List[str] = []
    for seg in segments:
        trace.extend([seg.occupant] * seg.duration)
    return trace


def total_duration(segments: Iterable[TimelineSegment]) -> int:
    return sum(seg.duration for seg in segments)
