"""
CPU slot model for the scheduling simulator.

A cluster is a fixed array of CPUs indexed 0..cpu_count-1. Each CPU is either:
- empty,
- running exactly one job,
- in switch overhead until `overhead_until` (accepts no job), or
- held idle until `idle_until` (quantum-boundary mode, after an early completion).

Each CPU also owns its currently open trace segment, so consecutive intervals with
the same occupant are recorded as a single CPUTimeSlot. A segment is closed when
the occupant changes (another job, overhead, idle hold, or nothing) or the run ends.
"""
from errors import SimulationError
from jobs import EPSILON
from timeline import CPUTimeSlot, IDLE, OVERHEAD


class CPU:
    def __init__(self, index):
        self.index = index
        self.job = None
        self.slice_left = 0.0  # time left in the current Round Robin slice
        self.overhead_until = 0.0
        self.idle_until = 0.0
        self.released_jid = None  # last job on this CPU, until the CPU sits empty
        self.segment = None  # open segment: [label, start, end]

    def in_overhead(self, now):
        return self.overhead_until > now + EPSILON

    def is_held(self, now):
        return self.idle_until > now + EPSILON

    def occupant(self, now):
        """Label of what this CPU does from `now` on: a job id, OVERHEAD, IDLE or None."""
        if self.job is not None:
            return self.job.jid
        if self.in_overhead(now):
            return OVERHEAD
        if self.is_held(now):
            return IDLE
        return None

    def is_switch(self, state):
        """True if giving `state` to this CPU hands it over directly from a different job."""
        return self.released_jid is not None and self.released_jid != state.jid

    def extend_segment(self, label, start, end):
        """Extend the open segment over [start, end), closing it first if the occupant changed."""
        closed = None
        if self.segment is not None and self.segment[0] != label:
            closed = self.close_segment()
        if self.segment is None:
            self.segment = [label, start, end]
        else:
            self.segment[2] = end
        return closed

    def close_segment(self):
        """Close the open segment and return it as a CPUTimeSlot (or None if nothing is open)."""
        if self.segment is None:
            return None
        label, start, end = self.segment
        self.segment = None
        if end <= start:
            raise SimulationError(f"CPU {self.index}: empty or backward segment [{start}, {end}) for {label}")
        return CPUTimeSlot(self.index, label, start, end, label == IDLE, label == OVERHEAD)

    def __repr__(self):
        return f"CPU({self.index}, job={self.job.jid if self.job else None})"


class Cluster:
    def __init__(self, cpu_count):
        self.cpus = [CPU(i) for i in range(cpu_count)]

    def __len__(self):
        return len(self.cpus)

    def __iter__(self):
        return iter(self.cpus)

    def busy(self):
        return [cpu for cpu in self.cpus if cpu.job is not None]

    def allocate(self, cpu, state, now, quantum=None):
        """Place `state` on `cpu`, starting a fresh slice when a quantum is given."""
        cpu.job = state
        cpu.released_jid = None
        if quantum is not None:
            cpu.slice_left = quantum
        state.mark_started(now)

    def release(self, cpu):
        """
        Free `cpu` and return the job that was on it.

        The open segment stays open: if the same job is handed straight back to this
        CPU the trace shows one continuous slot.
        """
        state = cpu.job
        cpu.job = None
        cpu.slice_left = 0.0
        cpu.released_jid = state.jid if state is not None else None
        return state

    def start_overhead(self, cpu, now, duration):
        cpu.overhead_until = now + duration
        # a CPU only pays overhead once per hand-off
        cpu.released_jid = None
