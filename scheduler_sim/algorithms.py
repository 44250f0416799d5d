from __future__ import annotations

import logging
from typing import Callable, Dict, List, Sequence, Tuple

from .errors import InvalidInputError
from .metrics import compute_system_metrics
from .models import IDLE, Algorithm, Process, ProcessResult, SimulationResult
from .timeline import compress

logger = logging.getLogger(__name__)

StrategyOutput = Tuple[List[str], List[ProcessResult]]
Strategy = Callable[[Sequence[Process]], StrategyOutput]


def shortest_job_key(length: int, p: Process) -> Tuple[int, int, str]:
    """
    Ordering shared by both SJF variants: shorter job, then earlier arrival, then PID.

    ``length`` is the full burst for SJF and the remaining burst for SRTF.
    """
    return (length, p.arrival, p.pid)


def schedule_fcfs(processes: Sequence[Process]) -> StrategyOutput:
    """
    First-Come First-Serve (non-preemptive).

    Equal arrivals are ordered by PID so the result does not depend on the
    order of the input list.
    """
    processes_sorted = sorted(processes, key=lambda p: (p.arrival, p.pid))

    time = 0
    trace: List[str] = []
    results: List[ProcessResult] = []

    for p in processes_sorted:
        if p.arrival > time:
            trace.extend([IDLE] * (p.arrival - time))
            time = p.arrival

        trace.extend([p.pid] * p.burst)
        time += p.burst

        results.append(ProcessResult.completed(p, completion=time))
        logger.debug("FCFS: %s completed at t=%d", p.pid, time)

    return trace, results


def schedule_sjf(processes: Sequence[Process]) -> StrategyOutput:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. When nothing has
    arrived, jump straight to the next arrival as a single idle run.
    """
    pending: List[Process] = list(processes)

    time = 0
    trace: List[str] = []
    results: List[ProcessResult] = []

    while pending:
        ready = [p for p in pending if p.arrival <= time]

        if not ready:
            next_arrival = min(p.arrival for p in pending)
            trace.extend([IDLE] * (next_arrival - time))
            time = next_arrival
            continue

        p = min(ready, key=lambda x: shortest_job_key(x.burst, x))

        trace.extend([p.pid] * p.burst)
        time += p.burst

        results.append(ProcessResult.completed(p, completion=time))
        logger.debug("SJF: %s completed at t=%d", p.pid, time)

        pending.remove(p)

    return trace, results


def schedule_srtf(processes: Sequence[Process]) -> StrategyOutput:
    """
    Shortest Remaining Time First (preemptive SJF).

    Time advances one unit at a time and the ready set is re-evaluated at
    every unit, so a shorter arrival preempts the running process at once.
    """
    procs = list(processes)
    remaining = [p.burst for p in procs]
    left = len(procs)

    time = 0
    trace: List[str] = []
    results: List[ProcessResult] = []

    while left:
        ready = [i for i, p in enumerate(procs) if p.arrival <= time and remaining[i] > 0]

        if not ready:
            trace.append(IDLE)
            time += 1
            continue

        idx = min(ready, key=lambda i: shortest_job_key(remaining[i], procs[i]))
        current = procs[idx]

        remaining[idx] -= 1
        trace.append(current.pid)
        time += 1

        if remaining[idx] == 0:
            left -= 1
            results.append(ProcessResult.completed(current, completion=time))
            logger.debug("SRTF: %s completed at t=%d", current.pid, time)

    return trace, results


ALGORITHMS: Dict[Algorithm, Strategy] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF_NP: schedule_sjf,
    Algorithm.SRTF: schedule_srtf,
}


def simulate(algorithm: Algorithm | str, processes: Sequence[Process]) -> SimulationResult:
    """
    Run one scheduling discipline over ``processes`` and compress its trace.

    Inputs are assumed to be validated already; the only check made here is
    that there is at least one process.
    """
    alg = Algorithm.parse(algorithm)
    procs = tuple(processes)
    if not procs:
        raise InvalidInputError("Cannot simulate an empty process list")

    logger.debug("Simulating %s over %d processes", alg.label, len(procs))
    trace, results = ALGORITHMS[alg](procs)

    result = SimulationResult(
        algorithm=alg,
        timeline=compress(trace),
        results=results,
        trace=trace,
    )
    compute_system_metrics(result)
    return result
