"""
Engine entry points: run SRTN or Round Robin on a list of job definitions.

Both entry points validate their input first (nothing is simulated on bad input),
run a fresh Simulator and aggregate the trace into a ScheduleResult. Runs are pure:
calling either function twice with the same arguments yields equal results.
"""
import numbers

import metrics
from errors import ScheduleValidationError
from jobs import Job
from schedulers.round_robin import RoundRobin
from schedulers.srtn import SRTN
from simulator import END_TIME, MODES, QUANTUM_BOUNDARY, Simulator
from timeline import IDLE, OVERHEAD

DEFAULT_SRTN_QUANTUM = 1.0


class ScheduleResult:
    """
    Aggregate output of one simulation run.

    Attributes:
        job_results: dict job id -> JobResult
        cpu_time_slots: list of CPUTimeSlot ordered by (start, cpu_id)
        queue_snapshots: list of QueueSnapshot in time order
        average_turnaround_time: mean turnaround over all jobs
        cpu_utilization: productive share of CPU time, in percent
        quantum: quantum actually used (None for SRTN in end-time mode)
    """

    def __init__(self, algorithm, cpu_count, mode, overhead, quantum, job_results,
                 cpu_time_slots, queue_snapshots):
        self.algorithm = algorithm
        self.cpu_count = cpu_count
        self.mode = mode
        self.overhead = overhead
        self.quantum = quantum
        self.job_results = job_results
        self.cpu_time_slots = cpu_time_slots
        self.queue_snapshots = queue_snapshots
        self.average_turnaround_time = metrics.average_turnaround_time(job_results)
        self.cpu_utilization = metrics.cpu_utilization(cpu_time_slots, cpu_count)

    @property
    def makespan(self):
        return metrics.makespan(self.cpu_time_slots)

    def completion_order(self):
        """Job ids sorted by completion time (ties by job id)."""
        return sorted(self.job_results, key=lambda jid: (self.job_results[jid].end_time, jid))

    def slots_for_cpu(self, cpu_id):
        return [s for s in self.cpu_time_slots if s.cpu_id == cpu_id]

    def to_dict(self):
        return {
            "algorithm": self.algorithm,
            "cpuCount": self.cpu_count,
            "mode": self.mode,
            "overhead": self.overhead,
            "quantum": self.quantum,
            "jobResults": {
                jid: {
                    "startTime": r.start_time,
                    "endTime": r.end_time,
                    "turnaroundTime": r.turnaround_time,
                }
                for jid, r in sorted(self.job_results.items())
            },
            "cpuTimeSlots": [s.to_dict() for s in self.cpu_time_slots],
            "queueSnapshots": [q.to_dict() for q in self.queue_snapshots],
            "averageTurnaroundTime": self.average_turnaround_time,
            "cpuUtilization": self.cpu_utilization,
        }

    def __eq__(self, other):
        if not isinstance(other, ScheduleResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"ScheduleResult({self.algorithm}, jobs={len(self.job_results)}, "
                f"avg_tat={self.average_turnaround_time:.2f}, util={self.cpu_utilization:.1f}%)")


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_inputs(jobs, cpu_count, mode, overhead, quantum=None, require_quantum=False):
    """
    Check every input constraint and raise once with all violations.

    Raises:
        ScheduleValidationError: listing each violated constraint
    """
    reasons = []
    if not jobs:
        reasons.append("at least one job is required")
    if not isinstance(cpu_count, numbers.Integral) or isinstance(cpu_count, bool) or cpu_count < 1:
        reasons.append(f"number of CPUs must be an integer >= 1 (got {cpu_count!r})")
    if mode not in MODES:
        reasons.append(f"mode must be one of {', '.join(MODES)} (got {mode!r})")
    if not _is_number(overhead) or overhead < 0:
        reasons.append(f"switching overhead must be >= 0 (got {overhead!r})")
    if require_quantum or quantum is not None:
        if not _is_number(quantum) or quantum <= 0:
            reasons.append(f"time quantum must be greater than 0 (got {quantum!r})")

    seen = set()
    for job in jobs or []:
        if not isinstance(job, Job):
            reasons.append(f"expected a Job, got {job!r}")
            continue
        if job.jid in seen:
            reasons.append(f"duplicate job id {job.jid!r}")
        seen.add(job.jid)
        if job.jid in (IDLE, OVERHEAD):
            reasons.append(f"job id {job.jid!r} is reserved")
        if not _is_number(job.arrival) or job.arrival < 0:
            reasons.append(f"job {job.jid}: arrival time must be non-negative (got {job.arrival!r})")
        if not _is_number(job.burst) or job.burst <= 0:
            reasons.append(f"job {job.jid}: burst time must be positive (got {job.burst!r})")

    if reasons:
        raise ScheduleValidationError(reasons)


def _run(scheduler, jobs, cpu_count, mode, overhead, quantum, debug):
    sim = Simulator(jobs, cpu_count, scheduler, mode=mode, quantum=quantum,
                    overhead=overhead, debug=debug)
    sim.run()
    return ScheduleResult(
        algorithm=scheduler.name,
        cpu_count=cpu_count,
        mode=mode,
        overhead=overhead,
        quantum=quantum,
        job_results=sim.job_results,
        cpu_time_slots=sim.slots,
        queue_snapshots=sim.snapshots,
    )


def run_srtn(jobs, cpu_count, mode=QUANTUM_BOUNDARY, overhead=0.0, quantum=DEFAULT_SRTN_QUANTUM,
             debug=False):
    """
    Schedule `jobs` with Shortest Remaining Time Next.

    Args:
        jobs: List of Job definitions (left untouched)
        cpu_count: Number of CPUs (>= 1)
        mode: QUANTUM_BOUNDARY (re-evaluate at multiples of `quantum`) or END_TIME
        overhead: Switching overhead charged when a CPU changes job (>= 0)
        quantum: Re-evaluation cadence in quantum-boundary mode (ignored in end-time mode)
        debug: Print a line per scheduling event

    Returns:
        ScheduleResult

    Raises:
        ScheduleValidationError: on invalid input, before anything is simulated
    """
    if mode == END_TIME:
        quantum = None
    validate_inputs(jobs, cpu_count, mode, overhead, quantum=quantum,
                    require_quantum=mode == QUANTUM_BOUNDARY)
    return _run(SRTN(), jobs, cpu_count, mode, overhead, quantum, debug)


def run_round_robin(jobs, cpu_count, quantum, mode=QUANTUM_BOUNDARY, overhead=0.0, debug=False):
    """
    Schedule `jobs` with Round Robin using a time slice of `quantum`.

    Args:
        jobs: List of Job definitions (left untouched)
        cpu_count: Number of CPUs (>= 1)
        quantum: Time slice length (> 0); also the boundary spacing in quantum-boundary mode
        mode: QUANTUM_BOUNDARY or END_TIME
        overhead: Switching overhead charged when a CPU changes job (>= 0)
        debug: Print a line per scheduling event

    Returns:
        ScheduleResult

    Raises:
        ScheduleValidationError: on invalid input, before anything is simulated
    """
    validate_inputs(jobs, cpu_count, mode, overhead, quantum=quantum, require_quantum=True)
    return _run(RoundRobin(quantum), jobs, cpu_count, mode, overhead, quantum, debug)
