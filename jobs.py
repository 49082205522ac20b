"""
Job model for the CPU scheduling simulator.

- Job: immutable definition supplied by the caller (id, arrival, burst)
- JobState: per-run mutable record tracking remaining work
- JobResult: completion record, created exactly once per job
"""
from collections import namedtuple

EPSILON = 1e-5

JobResult = namedtuple("JobResult", ["job_id", "start_time", "end_time", "turnaround_time"])


class Job:
    __slots__ = ("jid", "arrival", "burst")

    def __init__(self, jid, arrival, burst):
        object.__setattr__(self, "jid", str(jid))
        object.__setattr__(self, "arrival", arrival)
        object.__setattr__(self, "burst", burst)

    def __setattr__(self, name, value):
        raise AttributeError("Job definitions are read-only")

    @classmethod
    def from_dict(cls, data):
        """
        Build a job from a mapping with keys id, arrival and burst.

        The long names arrivalTime / burstTime are accepted as well.
        """
        jid = data["id"]
        arrival = data.get("arrival", data.get("arrivalTime", 0))
        burst = data.get("burst", data.get("burstTime"))
        return cls(jid, float(arrival), float(burst))

    def to_dict(self):
        return {"id": self.jid, "arrival": self.arrival, "burst": self.burst}

    def __eq__(self, other):
        if not isinstance(other, Job):
            return NotImplemented
        return (self.jid, self.arrival, self.burst) == (other.jid, other.arrival, other.burst)

    def __hash__(self):
        return hash((self.jid, self.arrival, self.burst))

    def __repr__(self):
        return f"Job({self.jid!r}, arrival={self.arrival}, burst={self.burst})"


class JobState:
    """
    Mutable view of a job for the duration of one simulation run.

    The simulator builds a fresh JobState for every job at the start of each run,
    so the caller's Job objects are never touched and runs never share state.
    """

    def __init__(self, job):
        self.job = job
        self.remaining = job.burst  # burst minus CPU time consumed so far
        self.start = None  # first instant the job occupied a CPU
        self.finish = None
        self.enqueue_seq = 0  # position stamp for FIFO ordering

    @property
    def jid(self):
        return self.job.jid

    @property
    def arrival(self):
        return self.job.arrival

    @property
    def burst(self):
        return self.job.burst

    def mark_started(self, now):
        if self.start is None:
            self.start = now

    def record_run(self, delta):
        self.remaining = max(0.0, self.remaining - delta)

    def is_complete(self, epsilon=EPSILON):
        return self.remaining <= epsilon

    def result(self):
        """Build the completion record; only valid once finish is set."""
        return JobResult(self.jid, self.start, self.finish, self.finish - self.arrival)

    def __repr__(self):
        return f"JobState({self.jid!r}, remaining={self.remaining:.4f})"
