"""
Performance metrics computed from a finished simulation trace.

Core metrics:
1. Average turnaround time: mean of (completion - arrival) over all jobs (lower is better)
2. CPU utilization: % of available CPU time spent on real work, excluding idle and
   switch-overhead slots (0–100, higher is better)

Extras used by the CLI and plots: makespan, per-job busy time, average waiting and
response time, and a per-instant view of queue snapshots.

All functions are pure: they only read the trace they are given.
"""
import numpy as np


def average_turnaround_time(job_results):
    """
    Mean turnaround time over all completed jobs.

    Args:
        job_results: Mapping job id -> JobResult (or an iterable of JobResult)

    Returns:
        Average turnaround time, 0.0 if no job completed
    """
    results = list(job_results.values()) if hasattr(job_results, "values") else list(job_results)
    if not results:
        return 0.0
    return float(np.mean([r.turnaround_time for r in results]))


def makespan(slots):
    """Time at which the last CPU slot ends (0.0 for an empty trace)."""
    if not slots:
        return 0.0
    return float(max(s.end for s in slots))


def cpu_utilization(slots, cpu_count):
    """
    Utilization = (sum of productive slot durations) / (makespan × CPU count) × 100

    Idle and overhead slots count toward the makespan but not toward productive time.
    Returns a value in [0, 100].
    """
    total_time = makespan(slots)
    if total_time <= 0 or cpu_count <= 0:
        return 0.0
    productive = sum(s.duration for s in slots if s.is_productive)
    return float(productive / (total_time * cpu_count) * 100.0)


def busy_time_by_job(slots):
    """Productive CPU time per job id, summed over all CPUs."""
    busy = {}
    for s in slots:
        if s.is_productive:
            busy[s.job_id] = busy.get(s.job_id, 0.0) + s.duration
    return busy


def average_waiting_time(job_results, jobs):
    """
    Mean time jobs spent not running: turnaround - burst.

    Args:
        job_results: Mapping job id -> JobResult
        jobs: Job definitions the results were computed from
    """
    if not job_results:
        return 0.0
    bursts = {job.jid: job.burst for job in jobs}
    waits = [r.turnaround_time - bursts[jid] for jid, r in job_results.items()]
    return float(np.mean(waits))


def average_response_time(job_results, jobs):
    """Mean delay between a job's arrival and its first time on a CPU."""
    if not job_results:
        return 0.0
    arrivals = {job.jid: job.arrival for job in jobs}
    responses = [r.start_time - arrivals[jid] for jid, r in job_results.items()]
    return float(np.mean(responses))


def queue_timeline(snapshots):
    """
    Collapse queue snapshots to one entry per instant (the last snapshot taken wins).

    Returns:
        List of (time, [job ids in queue order]) sorted by time
    """
    by_time = {}
    for snap in snapshots:
        by_time[snap.time] = snap.job_ids
    return sorted(by_time.items())
