"""
Immutable trace records produced by a simulation run.

CPUTimeSlot rows describe what each CPU did over a time range; QueueSnapshot
rows capture the ready queue whenever its composition changes.
"""
from collections import namedtuple

IDLE = "IDLE"
OVERHEAD = "OVERHEAD"


class CPUTimeSlot(namedtuple("CPUTimeSlot", ["cpu_id", "job_id", "start", "end", "is_idle", "is_overhead"])):
    __slots__ = ()

    @property
    def duration(self):
        return self.end - self.start

    @property
    def is_productive(self):
        return not (self.is_idle or self.is_overhead)

    def to_dict(self):
        return {
            "cpuId": self.cpu_id,
            "jobId": self.job_id,
            "startTime": self.start,
            "endTime": self.end,
            "isIdle": self.is_idle,
            "isOverhead": self.is_overhead,
        }


class QueueSnapshot(namedtuple("QueueSnapshot", ["time", "queue"])):
    """Ready queue at `time` as a tuple of (job_id, remaining) pairs, head first."""

    __slots__ = ()

    @classmethod
    def capture(cls, time, ready):
        return cls(time, tuple((s.jid, s.remaining) for s in ready))

    @property
    def job_ids(self):
        return [jid for jid, _ in self.queue]

    def to_dict(self):
        return {
            "time": self.time,
            "readyQueue": [{"id": jid, "remainingTime": rem} for jid, rem in self.queue],
        }
