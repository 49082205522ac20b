"""
Event clock: finds the next instant at which the system state must be re-evaluated.

Candidate events:
- the next not-yet-arrived job's arrival
- the earliest completion among running jobs
- the earliest Round Robin slice expiry among running jobs
- the next quantum boundary (quantum-boundary mode only)
- the earliest switch-overhead expiry or idle-hold end
"""
import math

from jobs import EPSILON


def next_boundary(now, quantum):
    """First multiple of `quantum` strictly after `now` (beyond float noise)."""
    return quantum * (math.floor((now + EPSILON) / quantum) + 1)


def boundary_at_or_after(t, quantum):
    """First multiple of `quantum` that is >= `t`."""
    if is_boundary(t, quantum):
        return quantum * round(t / quantum)
    return next_boundary(t, quantum)


def is_boundary(now, quantum):
    return abs(now - quantum * round(now / quantum)) <= EPSILON


def next_event_time(sim):
    """
    Compute the next event time for the simulation run `sim`.

    Args:
        sim: Simulator instance (provides the clock, pending arrivals, CPUs and config)

    Returns:
        Smallest event time later than sim.time, or None if no event is pending
    """
    now = sim.time
    candidates = []

    if sim.pending:
        candidates.append(sim.pending[0].arrival)

    for cpu in sim.cluster:
        if cpu.job is not None:
            candidates.append(now + cpu.job.remaining)
            if sim.scheduler.uses_time_slice:
                candidates.append(now + cpu.slice_left)
        if cpu.in_overhead(now):
            candidates.append(cpu.overhead_until)
        if cpu.is_held(now):
            candidates.append(cpu.idle_until)

    if sim.quantum_boundaries and (candidates or sim.ready):
        candidates.append(next_boundary(now, sim.quantum))

    candidates = [t for t in candidates if t > now + EPSILON]
    if not candidates:
        return None
    return min(candidates)
