from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Set

from .config import MAX_TIME_UNIT
from .errors import ValidationError
from .models import Process

logger = logging.getLogger(__name__)

# Workload files written for the old CLI use the longer column names.
_FIELD_ALIASES = {
    "arrival": ("arrival", "arrival_time"),
    "burst": ("burst", "burst_time"),
}

_WHOLE_NUMBER = re.compile(r"-?[0-9]+")


def _field(entry: Mapping[str, Any], name: str) -> Any:
    for key in _FIELD_ALIASES[name]:
        if key in entry:
            return entry[key]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_int(value: Any) -> Optional[int]:
    """
    Whole numbers only: ints, or strings of ASCII digits with an optional minus sign.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _WHOLE_NUMBER.fullmatch(value.strip()):
        return int(value.strip())
    return None


def validate_entry(entry: Mapping[str, Any], max_time: int = MAX_TIME_UNIT) -> Optional[Process]:
    """
    Turn one raw ``{pid, arrival, burst}`` mapping into a Process.

    Returns None for a row whose arrival and burst are both blank; such rows
    are placeholders and are skipped rather than rejected.
    """
    pid = "" if entry.get("pid") is None else str(entry["pid"]).strip()
    if not pid:
        raise ValidationError("PID cannot be empty for any process.")

    raw_arrival = _field(entry, "arrival")
    raw_burst = _field(entry, "burst")

    if _is_blank(raw_arrival) and _is_blank(raw_burst):
        logger.debug("Skipping blank row for %s", pid)
        return None

    if _is_blank(raw_arrival) or _is_blank(raw_burst):
        raise ValidationError(f"Process {pid}: Arrival Time and Burst Time must both be filled.", pid=pid)

    arrival = _to_int(raw_arrival)
    burst = _to_int(raw_burst)
    if arrival is None or burst is None:
        raise ValidationError(f"Process {pid}: Arrival Time and Burst Time must be valid numbers.", pid=pid)

    if arrival < 0 or burst < 1:
        raise ValidationError(
            f"Process {pid}: Arrival Time must be >= 0 and Burst Time must be >= 1.", pid=pid
        )

    if arrival > max_time or burst > max_time:
        raise ValidationError(f"Process {pid}: Value too large. Times must be <= {max_time}.", pid=pid)

    return Process(pid=pid, arrival=arrival, burst=burst)


def validate_processes(entries: Iterable[Mapping[str, Any]], max_time: int = MAX_TIME_UNIT) -> List[Process]:
    """
    Validate a whole workload, stopping at the first problem found.
    """
    processes: List[Process] = []
    seen: Set[str] = set()

    for entry in entries:
        if not isinstance(entry, Mapping):
            raise ValidationError(f"Invalid process entry: {entry!r}")

        proc = validate_entry(entry, max_time=max_time)
        if proc is None:
            continue
        if proc.pid in seen:
            raise ValidationError(f"Process {proc.pid}: Duplicate PID.", pid=proc.pid)
        seen.add(proc.pid)
        processes.append(proc)

    if not processes:
        raise ValidationError("Please define at least one process.")

    return processes
