from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import UnknownAlgorithmError

IDLE = "IDLE"


class Algorithm(str, Enum):
    FCFS = "FCFS"
    SJF_NP = "SJF_NP"
    SRTF = "SRTF"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "Algorithm | str") -> "Algorithm":
        """
        Accept an Algorithm member or one of the CLI spellings (case-insensitive).
        """
        if isinstance(value, Algorithm):
            return value
        key = str(value).strip().lower().replace("-", "_")
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownAlgorithmError(f"Unknown algorithm '{value}'") from None


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.SJF_NP: "SJF (non-preemptive)",
    Algorithm.SRTF: "SRTF (preemptive SJF)",
}

_ALIASES = {
    "fcfs": Algorithm.FCFS,
    "sjf": Algorithm.SJF_NP,
    "sjf_np": Algorithm.SJF_NP,
    "srtf": Algorithm.SRTF,
    "sjf_p": Algorithm.SRTF,
}


@dataclass(frozen=True)
class Process:
    pid: str
    arrival: int
    burst: int


@dataclass
class ProcessResult:
    pid: str
    arrival: int
    burst: int
    completion: int
    turnaround: int
    waiting: int

    @classmethod
    def completed(cls, process: Process, completion: int) -> "ProcessResult":
        turnaround = completion - process.arrival
        return cls(
            pid=process.pid,
            arrival=process.arrival,
            burst=process.burst,
            completion=completion,
            turnaround=turnaround,
            waiting=turnaround - process.burst,
        )


@dataclass
class TimelineSegment:
    """
    One run of consecutive time units held by the same occupant (a pid or IDLE).
    """

    occupant: str
    duration: int
    start: int = 0

    @property
    def end(self) -> int:
        return self.start + self.duration

    @property
    def is_idle(self) -> bool:
        return self.occupant == IDLE


@dataclass
class SystemMetrics:
    makespan: int
    cpu_busy_time: int
    idle_time: int
    throughput: float
    cpu_utilization: float


@dataclass
class SimulationResult:
    algorithm: Algorithm
    timeline: List[TimelineSegment] = field(default_factory=list)
    results: List[ProcessResult] = field(default_factory=list)
    trace: List[str] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def sorted_results(self) -> List[ProcessResult]:
        return sorted(self.results, key=lambda r: r.pid)
