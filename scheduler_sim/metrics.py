from __future__ import annotations

from typing import Dict, List

from .models import ProcessResult, SimulationResult, SystemMetrics


def compute_system_metrics(result: SimulationResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the per-process results and
    the compressed timeline.
    """
    if not result.results:
        system = SystemMetrics(makespan=0, cpu_busy_time=0, idle_time=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(r.completion for r in result.results)
    cpu_busy_time = sum(seg.duration for seg in result.timeline if not seg.is_idle)

    system = SystemMetrics(
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        throughput=len(result.results) / makespan,
        cpu_utilization=cpu_busy_time / makespan,
    )
    result.system = system
    return system


def summarize_process_metrics(results: List[ProcessResult]) -> Dict[str, float]:
    """
    Return averages of the per-process metrics for quick comparison.
    """
    if not results:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(results)
    return {
        "avg_waiting": sum(r.waiting for r in results) / n,
        "avg_turnaround": sum(r.turnaround for r in results) / n,
    }
