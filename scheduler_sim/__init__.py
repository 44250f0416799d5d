"""
Scheduler simulation package.

A deterministic CPU-scheduling engine (FCFS, non-preemptive SJF and SRTF)
plus a small command-line front end for running and comparing it.
"""

from .algorithms import simulate
from .errors import InvalidInputError, SchedulerError, ValidationError
from .models import IDLE, Algorithm, Process, ProcessResult, SimulationResult, TimelineSegment
from .timeline import compress

__all__ = [
    "IDLE",
    "Algorithm",
    "InvalidInputError",
    "Process",
    "ProcessResult",
    "SchedulerError",
    "SimulationResult",
    "TimelineSegment",
    "ValidationError",
    "compress",
    "simulate",
]
